class AVLGTreeError(Exception):
    """Erro base das operações da Árvore AVL-G."""


class EmptyTreeError(AVLGTreeError):
    """Operação sem sentido numa árvore vazia (search, delete, get_root)."""


class InvalidBalanceError(AVLGTreeError, ValueError):
    """Desbalanceamento máximo (G) menor que 1 na construção da árvore."""
