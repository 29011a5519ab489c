"""
Example: Solving a cone problem from CSC arrays with conebridge

This example demonstrates how to hand a problem in compressed sparse column
form straight to the solver.

Problem:
    minimize    x1 + x2
    subject to  x1 >= 1
                x2 >= 1
                ||(x1, x2)|| <= 3
"""

import numpy as np
from scipy import sparse
import conebridge


def main():
    print()
    print("=" * 70)
    print("conebridge Example: Direct Cone Problem from Arrays - Python")
    print("=" * 70)
    print()

    # A*x + s = b with s in K = R_+^2 x SOC(3)
    A = sparse.csc_matrix([
        [-1.0, 0.0],   # s1 = x1 - 1 >= 0
        [0.0, -1.0],   # s2 = x2 - 1 >= 0
        [0.0, 0.0],    # t = 3
        [-1.0, 0.0],   # (t, x1, x2) in SOC
        [0.0, -1.0],
    ])
    b = np.array([-1.0, -1.0, 3.0, 0.0, 0.0])
    c = np.array([1.0, 1.0])
    cone = {'l': 2, 'q': 3}

    m, n = A.shape
    print(f"Problem: {m} constraints, {n} variables, cone {cone}")
    print()

    # Solve with a warm start for x only; y and s are zero filled
    sol = conebridge.csolve(
        (m, n), A.data, A.indices, A.indptr, b, c, cone,
        opts={'max_iters': 5000, 'eps': 1e-6, 'verbose': 0},
        warm={'x': np.array([1.5, 1.5])},
    )

    print(sol)
    print()
    print("Primal solution:")
    print(f"  x1 = {sol.x[0]:.6f}")
    print(f"  x2 = {sol.x[1]:.6f}")
    print()
    print("=" * 70)
    print()


if __name__ == "__main__":
    try:
        main()
    except ImportError as e:
        print(f"Error: {e}")
        print("\nPlease install conebridge with the scs backend first:")
        print("  python -m pip install .[scs]")
    except Exception as e:
        print(f"Error: {e}")
        import traceback
        traceback.print_exc()
