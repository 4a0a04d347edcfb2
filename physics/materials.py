"""Material constants for the AlGaAs/GaAs conduction band."""

from __future__ import annotations

from dataclasses import dataclass

from utils.errors import ConfigurationError


@dataclass(frozen=True)
class Material:
    name: str
    mass_ratio: float
    band_offset_eV: float

    def effective_mass(self, m_e: float) -> float:
        return self.mass_ratio * m_e


GAAS = Material(name="GaAs", mass_ratio=0.07, band_offset_eV=0.0)
ALAS = Material(name="AlAs", mass_ratio=0.15, band_offset_eV=1.25)


def alloy(a: Material, b: Material, fraction: float, name: str | None = None) -> Material:
    """Linear interpolation ``fraction * a + (1 - fraction) * b``.

    ``alloy(ALAS, GAAS, 0.3)`` is Al0.3Ga0.7As with mass 0.094 m_e and a
    0.375 eV conduction-band offset.
    """
    if not 0.0 <= fraction <= 1.0:
        raise ConfigurationError("alloy fraction must be in [0, 1]")
    return Material(
        name=name or f"{a.name}{fraction:g}-{b.name}",
        mass_ratio=fraction * a.mass_ratio + (1.0 - fraction) * b.mass_ratio,
        band_offset_eV=fraction * a.band_offset_eV + (1.0 - fraction) * b.band_offset_eV,
    )


def algaas(aluminium_fraction: float, gaas: Material = GAAS, alas: Material = ALAS) -> Material:
    return alloy(alas, gaas, aluminium_fraction, name=f"Al{aluminium_fraction:g}Ga{1.0 - aluminium_fraction:g}As")


def material_from_dict(payload: dict) -> Material:
    mass_ratio = float(payload["mass_ratio"])
    if mass_ratio <= 0:
        raise ConfigurationError(f"{payload.get('name', 'material')}.mass_ratio must be positive")
    return Material(
        name=str(payload.get("name", "material")),
        mass_ratio=mass_ratio,
        band_offset_eV=float(payload.get("band_offset_eV", 0.0)),
    )
