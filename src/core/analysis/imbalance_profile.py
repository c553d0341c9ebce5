from typing import Any, Dict, Iterable, Sequence

import numpy as np

from src.core.structures.avlg_tree import AVLGTree

def min_nodes_for_height(height: int, max_imbalance: int) -> int:
    """
    Menor número de nós que uma árvore AVL-G de altura 'height' pode ter.
    Recorrência: N(h) = 1 + N(h-1) + N(h-1-G), com N(h) = 0 para h < 0.
    """
    if height < 0:
        return 0

    # minimal[i] guarda N(i - 1), para que minimal[0] represente a árvore vazia
    minimal = [0]
    for h in range(height + 1):
        taller = minimal[h]
        shorter = minimal[h - max_imbalance] if h - max_imbalance >= 0 else 0
        minimal.append(1 + taller + shorter)
    return minimal[-1]

def max_height_for_size(size: int, max_imbalance: int) -> int:
    """
    Maior altura possível de uma árvore AVL-G válida com 'size' nós.
    Retorna -1 para a árvore vazia.
    """
    height = -1
    while min_nodes_for_height(height + 1, max_imbalance) <= size:
        height += 1
    return height

def node_depths(tree: AVLGTree) -> np.ndarray:
    """Profundidade de cada nó (raiz = 0), em ordem de visita por profundidade."""
    depths = []
    frontier = [(tree.root, 0)] if tree.root else []
    while frontier:
        node, depth = frontier.pop()
        depths.append(depth)
        if node.left:
            frontier.append((node.left, depth + 1))
        if node.right:
            frontier.append((node.right, depth + 1))
    return np.array(depths, dtype=int)

def profile_tree(tree: AVLGTree) -> Dict[str, Any]:
    """Resumo do formato da árvore: altura, limite teórico, rotações e profundidade média."""
    size = tree.get_count()
    depths = node_depths(tree)

    return {
        'size': size,
        'height': tree.height(),
        'height_bound': max_height_for_size(size, tree.get_max_imbalance()),
        'rotations': tree.rotation_count,
        'mean_depth': float(np.mean(depths)) if size else 0.0,
        'height_ratio': float(tree.height() / np.log2(size + 1)) if size > 1 else 0.0,
    }

def profile_imbalances(keys: Sequence, imbalances: Iterable[int], verbose: bool = False) -> Dict[int, Dict[str, Any]]:
    """
    Constrói uma árvore por valor de G com a mesma sequência de chaves
    e compara altura e número de rotações entre elas.
    """
    results = {}
    for g in imbalances:
        tree = AVLGTree(g)
        for key in keys:
            tree.insert(key)

        results[g] = profile_tree(tree)
        if verbose:
            stats = results[g]
            print(f"[Perfil G={g}] n={stats['size']} | altura={stats['height']} "
                  f"(limite {stats['height_bound']}) | rotações={stats['rotations']} "
                  f"| prof. média={stats['mean_depth']:.2f}")
    return results
