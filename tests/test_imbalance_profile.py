import sys
import os

sys.path.append(os.path.abspath(os.path.join(os.path.dirname(__file__), '..')))

import numpy as np

from src.core.structures.avlg_tree import AVLGTree
from src.core.structures.exceptions import InvalidBalanceError
from src.core.analysis.imbalance_profile import (
    min_nodes_for_height, max_height_for_size, node_depths, profile_tree, profile_imbalances
)

def test_min_nodes_avl1_matches_fibonacci_bound():
    # Para G=1: N(h) = F(h+3) - 1
    expected = [1, 2, 4, 7, 12, 20, 33]
    computed = [min_nodes_for_height(h, 1) for h in range(7)]
    assert computed == expected, f"Esperado {expected}, obteve {computed}"
    assert min_nodes_for_height(-1, 1) == 0

def test_min_nodes_larger_imbalance():
    # G=2: N(h) = 1 + N(h-1) + N(h-3)
    assert [min_nodes_for_height(h, 2) for h in range(6)] == [1, 2, 3, 5, 8, 12]
    # Com G grande o pior caso é uma linha até a altura G
    assert min_nodes_for_height(3, 10) == 4

def test_max_height_for_size():
    assert max_height_for_size(0, 1) == -1
    assert max_height_for_size(1, 1) == 0
    assert max_height_for_size(3, 1) == 1
    assert max_height_for_size(4, 1) == 2
    assert max_height_for_size(3, 2) == 2

def test_node_depths():
    tree = AVLGTree(1)
    for key in [2, 1, 3]:
        tree.insert(key)

    depths = node_depths(tree)
    assert isinstance(depths, np.ndarray)
    assert sorted(depths.tolist()) == [0, 1, 1]
    assert node_depths(AVLGTree()).size == 0

def test_profile_tree():
    tree = AVLGTree(1)
    for key in range(7):
        tree.insert(key)

    stats = profile_tree(tree)
    print(f"Perfil: {stats}")
    assert stats['size'] == 7
    assert stats['height'] == 2, "7 chaves ordenadas numa AVL-1 formam uma árvore perfeita"
    assert stats['height_bound'] == 3
    assert stats['rotations'] == tree.rotation_count
    assert abs(stats['mean_depth'] - 10 / 7) < 1e-9

def test_larger_imbalance_trades_height_for_rotations():
    print("--- Teste: G maior => menos rotações, árvore mais alta ---")
    keys = list(range(100))
    results = profile_imbalances(keys, [1, 2, 3], verbose=True)

    assert set(results.keys()) == {1, 2, 3}
    assert results[3]['rotations'] < results[1]['rotations']
    assert results[3]['height'] >= results[1]['height']
    for g, stats in results.items():
        assert stats['height'] <= stats['height_bound'], f"G={g} passou do limite teórico"

def test_profile_rejects_invalid_imbalance():
    try:
        profile_imbalances([1, 2, 3], [1, 0])
    except InvalidBalanceError:
        pass
    else:
        assert False, "G=0 deveria lançar InvalidBalanceError"

if __name__ == "__main__":
    test_min_nodes_avl1_matches_fibonacci_bound()
    test_min_nodes_larger_imbalance()
    test_max_height_for_size()
    test_node_depths()
    test_profile_tree()
    test_larger_imbalance_trades_height_for_rotations()
    test_profile_rejects_invalid_imbalance()
