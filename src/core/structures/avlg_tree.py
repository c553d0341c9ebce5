from typing import Any, List, Optional

from src.core.structures.exceptions import EmptyTreeError, InvalidBalanceError

class AVLGNode:
    """
    Nó interno da Árvore AVL-G.
    Armazena a chave, a altura e o fator de balanceamento em cache.
    """
    def __init__(self, key):
        self.key = key
        self.left = None
        self.right = None
        self.height = 0         # Folha tem altura 0 (filho ausente conta como -1)
        self.balance = 0        # altura(esquerda) - altura(direita)

class AVLGTree:
    """
    Árvore AVL com desbalanceamento máximo configurável (AVL-G).

    Cada nó pode ter subárvores cujas alturas diferem em até G (max_imbalance).
    G = 1 é a AVL clássica; G maior tolera árvores mais altas em troca de
    menos rotações.
    Complexidade: O(log n) para inserção, remoção e busca (para G fixo).
    """
    DEFAULT_MAX_IMBALANCE = 1

    def __init__(self, max_imbalance: int = DEFAULT_MAX_IMBALANCE, verbose: bool = False):
        if max_imbalance < 1:
            raise InvalidBalanceError(
                f"O desbalanceamento máximo deve ser pelo menos 1 (recebido: {max_imbalance})."
            )

        self.root: Optional[AVLGNode] = None
        self.max_imbalance = max_imbalance
        self.count = 0
        self.rotation_count = 0  # Rotações simples (uma dupla conta como duas)
        self.verbose = verbose

    # --- Operações Públicas ---

    def insert(self, key) -> bool:
        """
        Insere uma chave e rebalanceia a árvore no caminho de volta da recursão.
        Chaves duplicadas são ignoradas: a estrutura e o contador não mudam.
        Retorna True se a chave foi inserida.
        """
        if self._find_node(key) is not None:
            return False

        self.root = self._insert_recursive(self.root, key)
        self.count += 1
        return True

    def delete(self, key):
        """
        Remove a chave e a retorna. Retorna None se a chave não existir.
        Lança EmptyTreeError se a árvore estiver vazia.
        """
        if self.is_empty():
            raise EmptyTreeError("Não é possível remover de uma árvore vazia.")

        node = self._find_node(key)
        if node is None:
            return None

        removed = node.key
        self.root = self._delete_recursive(self.root, key)
        self.count -= 1
        return removed

    def search(self, key):
        """
        Busca a chave em O(altura). Retorna a chave armazenada ou None.
        Lança EmptyTreeError se a árvore estiver vazia.
        """
        if self.is_empty():
            raise EmptyTreeError("Não é possível buscar numa árvore vazia.")

        node = self._find_node(key)
        return node.key if node else None

    def height(self) -> int:
        """Altura da árvore: -1 se vazia, 0 para um único nó."""
        return self._get_height(self.root)

    def is_empty(self) -> bool:
        return self.count == 0

    def get_root(self):
        """Retorna a chave da raiz sem removê-la."""
        if self.is_empty():
            raise EmptyTreeError("Uma árvore vazia não possui raiz.")
        return self.root.key

    def get_count(self) -> int:
        return self.count

    def get_max_imbalance(self) -> int:
        return self.max_imbalance

    def clear(self):
        """Descarta toda a estrutura de uma vez."""
        self.root = None
        self.count = 0
        self.rotation_count = 0

    def is_bst(self) -> bool:
        """Verifica globalmente a propriedade de Árvore Binária de Busca."""
        return self._is_bst_recursive(self.root, None, None)

    def is_avlg_balanced(self) -> bool:
        """
        Verifica globalmente a condição AVL-G (|balanço| <= G em todo nó).
        As alturas são recalculadas, sem confiar no cache dos nós.
        """
        return self._checked_height(self.root) is not None

    def in_order(self) -> List[Any]:
        """Retorna todas as chaves em ordem crescente (in-order traversal) para debug."""
        keys = []
        self._in_order(self.root, keys)
        return keys

    def __len__(self):
        return self.count

    def __contains__(self, key):
        return self._find_node(key) is not None

    def __repr__(self):
        root_key = self.root.key if self.root else None
        return (f"AVLGTree(G={self.max_imbalance}, count={self.count}, "
                f"height={self.height()}, root={root_key})")

    # --- Inserção e Remoção ---

    def _insert_recursive(self, node, key):
        # 1. Inserção normal de BST
        if not node:
            return AVLGNode(key)

        if key < node.key:
            node.left = self._insert_recursive(node.left, key)
        else:
            node.right = self._insert_recursive(node.right, key)

        # 2. Atualizar altura e balanço do nó ancestral
        self._update(node)

        # 3. Rotações quando o desbalanceamento passa de G
        # O lado que cresceu é decidido comparando a chave inserida com o filho
        if node.balance > self.max_imbalance:
            if key < node.left.key:
                return self._rotate_right(node)
            return self._rotate_left_right(node)

        if node.balance < -self.max_imbalance:
            if key > node.right.key:
                return self._rotate_left(node)
            return self._rotate_right_left(node)

        return node

    def _delete_recursive(self, node, key):
        if not node:
            return None

        if key < node.key:
            node.left = self._delete_recursive(node.left, key)
        elif key > node.key:
            node.right = self._delete_recursive(node.right, key)
        else:
            # Zero ou um filho: o filho (ou nada) ocupa o lugar do nó
            if node.left is None:
                return node.right
            if node.right is None:
                return node.left

            # Dois filhos: copia a chave do sucessor in-order e remove o sucessor
            successor = self._min_node(node.right)
            node.key = successor.key
            node.right = self._delete_recursive(node.right, successor.key)

        self._update(node)
        return self._rebalance_after_delete(node)

    def _rebalance_after_delete(self, node):
        """
        Após uma remoção o lado a ser corrigido é o oposto ao removido, então
        a decisão olha o balanço do filho mais alto. Balanço 0 nesse filho
        admite rotação simples ou dupla; a simples é sempre escolhida.
        """
        if node.balance < -self.max_imbalance:
            if node.right.balance <= 0:
                return self._rotate_left(node)
            return self._rotate_right_left(node)

        if node.balance > self.max_imbalance:
            if node.left.balance >= 0:
                return self._rotate_right(node)
            return self._rotate_left_right(node)

        return node

    # --- Métodos Auxiliares e Rotações ---

    def _find_node(self, key) -> Optional[AVLGNode]:
        current = self.root
        while current:
            if key == current.key:
                return current
            elif key < current.key:
                current = current.left
            else:
                current = current.right
        return None

    def _min_node(self, node):
        while node.left:
            node = node.left
        return node

    def _get_height(self, node):
        if not node:
            return -1
        return node.height

    def _update(self, node):
        left_height = self._get_height(node.left)
        right_height = self._get_height(node.right)
        node.height = 1 + max(left_height, right_height)
        node.balance = left_height - right_height

    def _rotate_left(self, z):
        """
        Realiza rotação simples à esquerda.
        O filho direito sobe; a subárvore esquerda dele passa a ser a direita de z.
        """
        y = z.right
        T2 = y.left

        # Rotação
        y.left = z
        z.right = T2

        # Atualiza z primeiro, pois agora ele é filho de y
        self._update(z)
        self._update(y)

        self.rotation_count += 1
        if self.verbose:
            print(f"[AVL-G] Rotação à esquerda em {z.key} -> nova raiz da subárvore: {y.key}")
        return y

    def _rotate_right(self, z):
        """
        Realiza rotação simples à direita.
        O filho esquerdo sobe; a subárvore direita dele passa a ser a esquerda de z.
        """
        y = z.left
        T3 = y.right

        # Rotação
        y.right = z
        z.left = T3

        self._update(z)
        self._update(y)

        self.rotation_count += 1
        if self.verbose:
            print(f"[AVL-G] Rotação à direita em {z.key} -> nova raiz da subárvore: {y.key}")
        return y

    def _rotate_left_right(self, z):
        """Rotação dupla: esquerda no filho esquerdo, depois direita em z (zig-zag)."""
        z.left = self._rotate_left(z.left)
        return self._rotate_right(z)

    def _rotate_right_left(self, z):
        """Rotação dupla: direita no filho direito, depois esquerda em z (zig-zag)."""
        z.right = self._rotate_right(z.right)
        return self._rotate_left(z)

    # --- Validadores ---

    def _is_bst_recursive(self, node, lower, upper) -> bool:
        if not node:
            return True
        if lower is not None and not lower < node.key:
            return False
        if upper is not None and not node.key < upper:
            return False
        return (self._is_bst_recursive(node.left, lower, node.key)
                and self._is_bst_recursive(node.right, node.key, upper))

    def _checked_height(self, node) -> Optional[int]:
        """Altura real da subárvore, ou None se algum nó violar a condição AVL-G."""
        if not node:
            return -1

        left_height = self._checked_height(node.left)
        if left_height is None:
            return None
        right_height = self._checked_height(node.right)
        if right_height is None:
            return None

        if abs(left_height - right_height) > self.max_imbalance:
            return None
        return 1 + max(left_height, right_height)

    def _in_order(self, node, keys):
        if node:
            self._in_order(node.left, keys)
            keys.append(node.key)
            self._in_order(node.right, keys)
