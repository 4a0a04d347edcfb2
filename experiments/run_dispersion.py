"""Entry point: subband dispersion of an AlGaAs/GaAs/AlGaAs quantum well."""

from __future__ import annotations

import argparse
import sys

from numerics.dispersion import run_sweep, wavevector_range
from physics.heterostructure import Heterostructure, quantum_well
from physics.materials import algaas, material_from_dict
from physics.units import UnitHandler, UnitSystem
from utils.config import load_config
from utils.errors import ConfigurationError, NumericalError
from utils.logging import build_logger
from utils.plotting import plot_band_profile, render_dispersion


def build_structure(cfg: dict, units: UnitSystem) -> Heterostructure:
    structure_cfg = cfg["structure"]
    gaas = material_from_dict(cfg["materials"]["GaAs"])
    alas = material_from_dict(cfg["materials"]["AlAs"])
    barrier = algaas(float(structure_cfg["aluminium_fraction"]), gaas=gaas, alas=alas)
    return quantum_well(
        lattice_spacing=float(structure_cfg["lattice_spacing"]),
        barrier_sites=structure_cfg["barrier_sites"],
        well_width=float(structure_cfg["well_width"]),
        barrier=barrier,
        well=gaas,
        m_e=units.electron_mass(),
    )


def main(argv: list[str] | None = None) -> int:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument("--config", type=str, default=None, help="JSON file merged over the default experiment.")
    parser.add_argument("--output", type=str, default=None, help="Override plot.output.")
    parser.add_argument("--workers", type=int, default=None, help="Override sweep.workers.")
    parser.add_argument("--band-profile", type=str, default=None, help="Also write the band-offset profile here.")
    parser.add_argument("--log-file", type=str, default=None)
    args = parser.parse_args(argv)

    logger = build_logger(args.log_file)

    try:
        cfg = load_config(args.config)
        if args.output is not None:
            cfg["plot"]["output"] = args.output
        if args.workers is not None:
            if args.workers <= 0:
                raise ConfigurationError("--workers must be positive")
            cfg["sweep"]["workers"] = args.workers

        u = cfg["units"]
        handler = UnitHandler()
        handler.initialize(u["charge"], u["count"], u["energy"], u["length"], u["temperature"], u["time"])
        units = handler.units
        hbar = units.reduced_planck_constant()
        structure = build_structure(cfg, units)
        left, well, right = structure.regions
        logger.info(
            "units=%s hbar=%.6e m_e=%.6e",
            ", ".join(units.scales()),
            hbar,
            units.electron_mass(),
        )
        logger.info(
            "structure sites=%d barrier=%s(%d) well=%s(%d) a=%.3f (%.3e m)",
            structure.site_count,
            left.label,
            left.width,
            well.label,
            well.width,
            structure.lattice_spacing,
            units.convert_length_to_base(structure.lattice_spacing),
        )

        sweep = cfg["sweep"]
        ks = wavevector_range(float(sweep["k_min"]), float(sweep["k_max"]), sweep["samples"])
        result = run_sweep(
            ks,
            structure,
            hbar,
            num_bands=int(sweep["num_bands"]),
            workers=int(sweep["workers"]),
            logger=logger,
        )
        logger.info(
            "k=%.4f lowest=%s",
            result.wavevectors[0],
            ", ".join(f"{e:.6f}" for e in result.eigenvalues[:, 0]),
        )

        plot = cfg["plot"]
        bounds = plot.get("y_bounds")
        out = render_dispersion(
            result,
            x_label=str(plot["x_label"]),
            y_label=str(plot["y_label"]),
            y_bounds=tuple(bounds) if bounds is not None else None,
            out_path=plot["output"],
        )
        logger.info("Dispersion plot written to %s", str(out))
        if args.band_profile:
            plot_band_profile(structure, args.band_profile)
            logger.info("Band profile written to %s", args.band_profile)
    except (ConfigurationError, NumericalError, OSError) as exc:
        logger.error("Run failed (%s): %s", type(exc).__name__, exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
