"""Barrier / well / barrier layer stack on a 1D lattice."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

from physics.materials import Material
from utils.errors import ConfigurationError


class SiteKind(Enum):
    LEFT_BARRIER = "left_barrier"
    BOUNDARY = "boundary"
    WELL = "well"
    RIGHT_BARRIER = "right_barrier"


@dataclass(frozen=True)
class MaterialRegion:
    label: str
    start: int
    end: int
    mass: float
    energy_offset: float

    @property
    def width(self) -> int:
        return self.end - self.start

    def hopping(self, hbar: float, lattice_spacing: float) -> float:
        """t = hbar^2 / (2 m a^2), the discretized second-derivative prefactor."""
        return hbar * hbar / (2.0 * self.mass * lattice_spacing * lattice_spacing)

    def kinetic_prefactor(self, hbar: float) -> float:
        """tp = hbar^2 / (2 m), the prefactor of the in-plane k^2 term."""
        return hbar * hbar / (2.0 * self.mass)


@dataclass(frozen=True)
class Heterostructure:
    """Three contiguous regions: left barrier, well, right barrier.

    ``site_regions[n]`` lists the region indices whose parameters are averaged
    on site ``n`` (one index for bulk sites, two for the interface sites at
    either end of the well). ``bond_regions[n]`` is the region whose hopping
    couples sites ``n`` and ``n + 1``.
    """

    lattice_spacing: float
    regions: tuple[MaterialRegion, MaterialRegion, MaterialRegion]
    site_kinds: tuple[SiteKind, ...] = field(init=False)
    site_regions: tuple[tuple[int, ...], ...] = field(init=False)
    bond_regions: tuple[int, ...] = field(init=False)

    def __post_init__(self) -> None:
        if self.lattice_spacing <= 0:
            raise ConfigurationError("lattice_spacing must be positive")
        if len(self.regions) != 3:
            raise ConfigurationError("a quantum well needs exactly three regions")

        expected_start = 0
        for region in self.regions:
            if region.start != expected_start:
                raise ConfigurationError(f"region {region.label!r} must start at site {expected_start}")
            if region.width < 0:
                raise ConfigurationError(f"region {region.label!r} has negative width")
            if region.mass <= 0:
                raise ConfigurationError(f"region {region.label!r} must have a positive mass")
            expected_start = region.end

        left, well, _ = self.regions
        n_sites = self.site_count
        kinds = classify_sites(left.width, well.width, n_sites)
        n_boundary = sum(1 for k in kinds if k is SiteKind.BOUNDARY)
        if n_sites <= 2 * n_boundary:
            raise ConfigurationError(
                f"site count {n_sites} must exceed twice the number of boundary sites ({n_boundary})"
            )

        site_regions = []
        for n, kind in enumerate(kinds):
            if kind is SiteKind.LEFT_BARRIER:
                site_regions.append((0,))
            elif kind is SiteKind.RIGHT_BARRIER:
                site_regions.append((2,))
            elif kind is SiteKind.WELL:
                site_regions.append((1,))
            elif n == well.start:
                site_regions.append((0, 1))
            else:
                site_regions.append((1, 2))

        bonds = []
        for n in range(n_sites - 1):
            if n < well.start:
                bonds.append(0)
            elif n >= well.end - 1:
                bonds.append(2)
            else:
                bonds.append(1)

        object.__setattr__(self, "site_kinds", tuple(kinds))
        object.__setattr__(self, "site_regions", tuple(site_regions))
        object.__setattr__(self, "bond_regions", tuple(bonds))

    @property
    def site_count(self) -> int:
        return self.regions[-1].end

    @property
    def well(self) -> MaterialRegion:
        return self.regions[1]

    def with_well_sites(self, well_sites: int) -> "Heterostructure":
        """Same materials and barrier width with a different well width."""
        left, well, right = self.regions
        return _stack(self.lattice_spacing, left.width, well_sites, left, well, right)


def classify_sites(barrier_sites: int, well_sites: int, site_count: int) -> list[SiteKind]:
    well_end = barrier_sites + well_sites
    kinds = []
    for n in range(site_count):
        if n < barrier_sites:
            kinds.append(SiteKind.LEFT_BARRIER)
        elif n >= well_end:
            kinds.append(SiteKind.RIGHT_BARRIER)
        elif n == barrier_sites or n == well_end - 1:
            kinds.append(SiteKind.BOUNDARY)
        else:
            kinds.append(SiteKind.WELL)
    return kinds


def _stack(
    lattice_spacing: float,
    barrier_sites: int,
    well_sites: int,
    left: MaterialRegion,
    well: MaterialRegion,
    right: MaterialRegion,
) -> Heterostructure:
    well_start = barrier_sites
    well_end = well_start + well_sites
    return Heterostructure(
        lattice_spacing=lattice_spacing,
        regions=(
            MaterialRegion(left.label, 0, well_start, left.mass, left.energy_offset),
            MaterialRegion(well.label, well_start, well_end, well.mass, well.energy_offset),
            MaterialRegion(right.label, well_end, well_end + barrier_sites, right.mass, right.energy_offset),
        ),
    )


def well_site_count(well_width: float, lattice_spacing: float) -> int:
    """Number of well sites: integer division of the physical width by the spacing."""
    if lattice_spacing <= 0:
        raise ConfigurationError("lattice_spacing must be positive")
    sites = int(well_width // lattice_spacing)
    if sites < 0:
        raise ConfigurationError(f"well width {well_width} gives a negative site count")
    return sites


def quantum_well(
    lattice_spacing: float,
    barrier_sites: int,
    well_width: float,
    barrier: Material,
    well: Material,
    m_e: float,
) -> Heterostructure:
    """Barrier/well/barrier stack with ``barrier_sites`` sites on each side.

    ``well_width`` is a physical length in the natural length unit.
    """
    if isinstance(barrier_sites, bool) or int(barrier_sites) != barrier_sites or barrier_sites < 0:
        raise ConfigurationError("barrier_sites must be a non-negative integer")
    if m_e <= 0:
        raise ConfigurationError("electron mass must be positive")

    n_well = well_site_count(well_width, lattice_spacing)
    b = int(barrier_sites)
    region_b = MaterialRegion(barrier.name, 0, 0, barrier.effective_mass(m_e), barrier.band_offset_eV)
    region_w = MaterialRegion(well.name, 0, 0, well.effective_mass(m_e), well.band_offset_eV)
    return _stack(lattice_spacing, b, n_well, region_b, region_w, region_b)
