"""Dense float matrices: naive and Strassen products, sums and printing."""

from __future__ import annotations

import argparse
import random
import time
from collections.abc import Sequence

Matrix = list[list[float]]
MatrixLike = Sequence[Sequence[float]]

# Below this size Strassen falls back to the plain product.
_STRASSEN_CUTOFF = 3


def _shape(matrix: MatrixLike) -> tuple[int, int]:
    rows = len(matrix)
    columns = len(matrix[0]) if rows else 0
    if any(len(row) != columns for row in matrix):
        raise ValueError("matrix rows must all have the same length")
    return rows, columns


def multiply(a: MatrixLike, b: MatrixLike) -> Matrix:
    """Return the product ``a`` times ``b`` by the row-by-column rule."""
    rows_a, cols_a = _shape(a)
    rows_b, _ = _shape(b)
    if cols_a != rows_b:
        raise ValueError("No se pueden multiplicar, por problemas en las dimensiones")
    columns_b = list(zip(*b))
    return [
        [float(sum(x * y for x, y in zip(row, column))) for column in columns_b]
        for row in a
    ]


def _elementwise(a: MatrixLike, b: MatrixLike, sign: int) -> Matrix:
    if _shape(a) != _shape(b):
        raise ValueError("matrices must have the same shape")
    return [[x + sign * y for x, y in zip(row_a, row_b)] for row_a, row_b in zip(a, b)]


def add(a: MatrixLike, b: MatrixLike) -> Matrix:
    """Return the element-wise sum of two matrices of the same shape."""
    return _elementwise(a, b, 1)


def subtract(a: MatrixLike, b: MatrixLike) -> Matrix:
    """Return ``a`` minus ``b`` element by element."""
    return _elementwise(a, b, -1)


def _square_size(a: MatrixLike, b: MatrixLike) -> int:
    rows_a, cols_a = _shape(a)
    rows_b, cols_b = _shape(b)
    if not (rows_a == cols_a == rows_b == cols_b):
        raise ValueError("Strassen needs two square matrices of the same size")
    return rows_a


def _pad(matrix: MatrixLike, size: int) -> Matrix:
    padded = [list(row) + [0.0] * (size - len(row)) for row in matrix]
    padded.extend([0.0] * size for _ in range(size - len(matrix)))
    return padded


def _quarters(matrix: MatrixLike, half: int) -> tuple[Matrix, Matrix, Matrix, Matrix]:
    top, bottom = matrix[:half], matrix[half:]
    return (
        [list(row[:half]) for row in top],
        [list(row[half:]) for row in top],
        [list(row[:half]) for row in bottom],
        [list(row[half:]) for row in bottom],
    )


def strassen(a: MatrixLike, b: MatrixLike) -> Matrix:
    """Multiply two square matrices with Strassen's seven-product recursion."""
    size = _square_size(a, b)
    if size < _STRASSEN_CUTOFF:
        return multiply(a, b)
    if size % 2:
        product = strassen(_pad(a, size + 1), _pad(b, size + 1))
        return [row[:size] for row in product[:size]]

    half = size // 2
    a11, a12, a21, a22 = _quarters(a, half)
    b11, b12, b21, b22 = _quarters(b, half)

    m1 = strassen(add(a11, a22), add(b11, b22))
    m2 = strassen(add(a21, a22), b11)
    m3 = strassen(a11, subtract(b12, b22))
    m4 = strassen(a22, subtract(b21, b11))
    m5 = strassen(add(a11, a12), b22)
    m6 = strassen(subtract(a21, a11), add(b11, b12))
    m7 = strassen(subtract(a12, a22), add(b21, b22))

    c11 = add(subtract(add(m1, m4), m5), m7)
    c12 = add(m3, m5)
    c21 = add(m2, m4)
    c22 = add(add(subtract(m1, m2), m3), m6)

    top = [left + right for left, right in zip(c11, c12)]
    bottom = [left + right for left, right in zip(c21, c22)]
    return top + bottom


def random_matrix(rows: int, columns: int, rng: random.Random | None = None) -> Matrix:
    """Return a matrix of whole numbers drawn uniformly from 1 to 100."""
    if rows < 0 or columns < 0:
        raise ValueError("dimensions must not be negative")
    source = rng if rng is not None else random.Random()
    return [[float(source.randrange(100) + 1) for _ in range(columns)] for _ in range(rows)]


def format_matrix(matrix: MatrixLike) -> str:
    """Render each value with six decimals and a tab, one line per row."""
    return "".join("".join(f"{value:f}\t" for value in row) + "\n" for row in matrix)


def _read_matrix() -> Matrix:
    rows = int(input("filas:\n"))
    columns = int(input("columnas\n"))
    if rows < 0 or columns < 0:
        raise ValueError("dimensions must not be negative")
    return [[float(input(f"[{i}][{j}]\n")) for j in range(columns)] for i in range(rows)]


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Compare the naive and Strassen products.")
    parser.add_argument("dimension", nargs="?", type=int, help="size of the square matrices")
    parser.add_argument("--manual", action="store_true", help="type a matrix in and print it")
    parser.add_argument("--show", action="store_true", help="print the products")
    parser.add_argument("--seed", type=int, default=None, help="seed for the random values")
    args = parser.parse_args(argv)

    if args.manual:
        try:
            matrix = _read_matrix()
        except ValueError as exc:
            print(exc)
            return 1
        print(format_matrix(matrix), end="")
        return 0

    print("Tarea 3")
    interactive = args.dimension is None
    size = int(input("Dimension:\t")) if interactive else args.dimension
    print()
    if size < 0:
        print("No se pueden multiplicar, por problemas en las dimensiones")
        return 1

    rng = random.Random(args.seed)
    a = random_matrix(size, size, rng)
    b = random_matrix(size, size, rng)

    def wants_output() -> bool:
        if not interactive:
            return args.show
        return input("Desea Ver Matriz Respuesta??(1:SI, 2:NO)").strip() == "1"

    print("Primero Ejecutamos Algoritmo Normal\nEspere Por favor...")
    start = time.perf_counter()
    product = multiply(a, b)
    print(f"Tiempo Algoritmo Normal : {time.perf_counter() - start:f} ")
    if wants_output():
        print(format_matrix(product), end="")

    start = time.perf_counter()
    product = strassen(a, b)
    print(f"Tiempo Algoritmo Strassen : {time.perf_counter() - start:f} ")
    if wants_output():
        print(format_matrix(product), end="")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())