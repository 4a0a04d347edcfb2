"""Natural unit system and derived physical constants.

Every quantity in the pipeline is a plain float expressed in the natural
units chosen here. The default system is (C, pcs, eV, Angstrom, K, s), in
which hbar ~ 6.58e-16 eV s and m_e ~ 5.69e-32 eV s^2 / Angstrom^2.
"""

from __future__ import annotations

from dataclasses import dataclass, field

import scipy.constants as const

from utils.errors import ConfigurationError


_PREFIXES = {
    "T": 1e12,
    "G": 1e9,
    "M": 1e6,
    "k": 1e3,
    "": 1.0,
    "m": 1e-3,
    "u": 1e-6,
    "n": 1e-9,
    "p": 1e-12,
    "f": 1e-15,
    "a": 1e-18,
}


_SMALL = ("", "m", "u", "n", "p", "f", "a")


def _prefixed(base: str, value: float, prefixes) -> dict[str, float]:
    return {p + base: _PREFIXES[p] * value for p in prefixes}


# Value of one unit in the corresponding SI base unit.
CHARGE_UNITS = _prefixed("C", 1.0, ("T", "G", "M", "k") + _SMALL)
COUNT_UNITS = {"pcs": 1.0, "mol": const.N_A}
ENERGY_UNITS = {
    **_prefixed("eV", const.e, ("T", "G", "M", "k", "", "m")),
    **_prefixed("J", 1.0, ("k",) + _SMALL),
}
LENGTH_UNITS = {**_prefixed("m", 1.0, _SMALL), "Ao": 1e-10}
TEMPERATURE_UNITS = _prefixed("K", 1.0, ("k",) + _SMALL)
TIME_UNITS = _prefixed("s", 1.0, _SMALL)

DEFAULT_SCALES = ("1 C", "1 pcs", "1 eV", "1 Ao", "1 K", "1 s")


def parse_scale(scale: str, units: dict[str, float], quantity: str) -> float:
    """Return the SI value of a scale string such as ``"1 eV"`` or ``"0.5 nm"``."""
    parts = str(scale).split()
    if len(parts) != 2:
        raise ConfigurationError(f"{quantity} scale must look like '<factor> <unit>', got {scale!r}")
    factor_str, symbol = parts
    try:
        factor = float(factor_str)
    except ValueError as exc:
        raise ConfigurationError(f"{quantity} scale factor is not a number: {factor_str!r}") from exc
    if factor <= 0:
        raise ConfigurationError(f"{quantity} scale factor must be positive")
    if symbol not in units:
        supported = ", ".join(sorted(units))
        raise ConfigurationError(f"Unknown {quantity} unit {symbol!r}. Supported: {supported}")
    return factor * units[symbol]


@dataclass(frozen=True)
class UnitSystem:
    charge: str = "1 C"
    count: str = "1 pcs"
    energy: str = "1 eV"
    length: str = "1 Ao"
    temperature: str = "1 K"
    time: str = "1 s"
    _si: dict = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        si = {
            "charge": parse_scale(self.charge, CHARGE_UNITS, "charge"),
            "count": parse_scale(self.count, COUNT_UNITS, "count"),
            "energy": parse_scale(self.energy, ENERGY_UNITS, "energy"),
            "length": parse_scale(self.length, LENGTH_UNITS, "length"),
            "temperature": parse_scale(self.temperature, TEMPERATURE_UNITS, "temperature"),
            "time": parse_scale(self.time, TIME_UNITS, "time"),
        }
        object.__setattr__(self, "_si", si)

    @classmethod
    def from_scales(
        cls,
        charge: str,
        count: str,
        energy: str,
        length: str,
        temperature: str,
        time: str,
    ) -> "UnitSystem":
        return cls(charge, count, energy, length, temperature, time)

    def scales(self) -> tuple[str, ...]:
        return (self.charge, self.count, self.energy, self.length, self.temperature, self.time)

    def reduced_planck_constant(self) -> float:
        """hbar in natural energy * time units."""
        return const.hbar / (self._si["energy"] * self._si["time"])

    def electron_mass(self) -> float:
        """m_e in natural energy * time^2 / length^2 units."""
        mass_unit = self._si["energy"] * self._si["time"] ** 2 / self._si["length"] ** 2
        return const.m_e / mass_unit

    def convert_energy_to_base(self, value: float) -> float:
        return value * self._si["energy"]

    def convert_length_to_base(self, value: float) -> float:
        return value * self._si["length"]


class UnitHandler:
    """One-shot holder for the unit system of a run.

    ``initialize`` may be called exactly once; the resulting ``UnitSystem`` is
    then passed explicitly to everything that needs physical constants.
    """

    def __init__(self) -> None:
        self._units: UnitSystem | None = None

    @property
    def is_initialized(self) -> bool:
        return self._units is not None

    @property
    def units(self) -> UnitSystem:
        if self._units is None:
            raise ConfigurationError("Unit system has not been initialized")
        return self._units

    def initialize(
        self,
        charge: str,
        count: str,
        energy: str,
        length: str,
        temperature: str,
        time: str,
    ) -> UnitSystem:
        if self._units is not None:
            raise ConfigurationError("Unit system is already initialized")
        self._units = UnitSystem.from_scales(charge, count, energy, length, temperature, time)
        return self._units
