"""A 32-bit linear feedback shift register and its cycle length."""

from __future__ import annotations

import argparse
from collections.abc import Iterator

MASK32 = 0xFFFFFFFF

# Bits read for the feedback. The third tap reads the same bit as the
# second one, so the two cancel out.
_TAPS = (0x10000000, 0x20000000, 0x20000000, 0x80000000)


class Lfsr32:
    """Shift register seeded with a 32-bit unsigned value."""

    def __init__(self, seed: int) -> None:
        if seed < 0:
            raise ValueError("seed must be a non-negative integer")
        self.seed = seed & MASK32
        self.register = self.seed

    def step(self) -> int:
        """Shift once, feeding back the tapped bits, and return the register."""
        reg = self.register
        feedback = 0
        for mask in _TAPS:
            feedback ^= 1 if reg & mask else 0
        self.register = ((reg << 1) | feedback) & MASK32
        return self.register

    def __iter__(self) -> Iterator[int]:
        while True:
            yield self.step()


def cycle_length(seed: int, limit: int | None = None) -> int:
    """Count the steps until the register comes back to the seed.

    Raises RuntimeError if ``limit`` steps pass without that happening.
    """
    lfsr = Lfsr32(seed)
    for count, value in enumerate(lfsr, start=1):
        if value == lfsr.seed:
            return count
        if limit is not None and count >= limit:
            raise RuntimeError(f"seed {seed} did not repeat within {limit} steps")
    raise AssertionError("unreachable")


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description="Cycle length of a 32-bit LFSR.")
    parser.add_argument("seed", nargs="?", type=int, help="seed for the register")
    parser.add_argument("--limit", type=int, default=None, help="give up after this many steps")
    args = parser.parse_args(argv)

    seed = args.seed
    interactive = seed is None
    if interactive:
        print("Ingrese un numero para la funcion semilla")
        seed = int(input().strip())
    print(f"ingreso: {seed}  ")
    if interactive:
        input("\nAPRIETE ENTER PARA CONTINUAR ")

    try:
        count = cycle_length(seed, args.limit)
    except RuntimeError as exc:
        print(exc)
        return 1
    print(f"\nLa funcion se uso {count} veces antes que se repitiera la semilla")
    return 0


if __name__ == "__main__":
    raise SystemExit(main())