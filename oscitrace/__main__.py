#!/usr/bin/env python3
"""
OsciTrace command-line interface.

Usage:
    python -m oscitrace                                  # Prompt for the six parameters
    python -m oscitrace --x0 1 --v0 0 --dt 0.01 --interval 10 --mass 1 --k 1
    python -m oscitrace --config myrun.py                # Parameters from a config file
    python -m oscitrace --check                          # Show available dependencies
    python -m oscitrace --version                        # Show version
"""

import argparse
import importlib.util
import sys
import warnings
from pathlib import Path
from typing import Callable, Dict, List, Optional

# flag dest -> (parameter name, interactive prompt)
PARAMETER_FLAGS = (
    ("x0", "initial_position", "Please enter the initial position of the particle."),
    ("v0", "initial_velocity", "Please enter the initial velocity of the particle."),
    ("dt", "time_step", "Please enter the time step of the movement."),
    ("interval", "time_interval", "Please enter the time interval of the movement."),
    ("mass", "mass", "Please enter the mass of the particle"),
    ("k", "spring_constant", "Please enter the spring constant(k)"),
)

EXIT_OK = 0
EXIT_NON_FINITE = 1
EXIT_INVALID = 2


def get_version():
    """Get OsciTrace version."""
    try:
        from oscitrace import __version__
        return __version__
    except ImportError:
        return "unknown"


def load_config_file(config_path):
    """Load configuration from a Python file defining a `config` dict."""
    spec = importlib.util.spec_from_file_location("user_config", config_path)
    if spec is None or spec.loader is None:
        raise ImportError(f"Cannot load config from {config_path}")

    config_module = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(config_module)

    if hasattr(config_module, 'config'):
        return dict(config_module.config)
    else:
        raise ValueError(f"Config file {config_path} must define a 'config' dictionary")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog='oscitrace',
        description='OsciTrace - 1-D harmonic oscillator with coupled Euler integration (F = -kx)',
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  python -m oscitrace                                   # Interactive prompts
  python -m oscitrace --x0 1 --v0 0 --dt 0.001 --interval 20 --mass 1 --k 1
  python -m oscitrace --config myrun.py --formats text xyz vtk

Configuration:
  A config file is a Python file defining a 'config' dictionary. It may hold
  the six parameters (initial_position, initial_velocity, time_step,
  time_interval, mass, spring_constant) and 'output_dir' / 'formats'.
  Command-line flags override config values.
"""
    )

    parser.add_argument('--version', action='version', version=f'OsciTrace {get_version()}')

    params = parser.add_argument_group('physical parameters')
    for dest, name, _ in PARAMETER_FLAGS:
        params.add_argument(f'--{dest}', dest=dest, type=float, default=None,
                            help=name.replace('_', ' '))

    parser.add_argument('--config', type=str,
                        help='Path to configuration file (Python file with config dict)')
    parser.add_argument('--output-dir', type=str, default=None,
                        help='Directory for output files (default: output)')
    parser.add_argument('--formats', nargs='+', default=None,
                        choices=['text', 'components', 'xyz', 'vtk', 'hdf5'],
                        help='Output formats (default: text xyz)')
    parser.add_argument('--plot', action='store_true',
                        help='Save time-series and phase-portrait PNGs')
    parser.add_argument('--report', action='store_true',
                        help='Write an analysis summary report')
    parser.add_argument('--jax', action='store_true',
                        help='Integrate with the JAX lax.scan path (float64)')
    parser.add_argument('--no-progress', action='store_true', help='Disable the progress bar')
    parser.add_argument('--quiet', action='store_true', help='Only print errors')
    parser.add_argument('--check', action='store_true',
                        help='Check optional dependencies and exit')
    return parser


def collect_parameters(args, file_config: Dict, prompt: Callable[[str], str] = input) -> Dict[str, float]:
    """
    Merge flags over config-file values; prompt for whatever is still missing.

    Raises
    ------
    ValueError
        If an entered value is not a number.
    """
    params = {}
    for dest, name, message in PARAMETER_FLAGS:
        value = getattr(args, dest)
        if value is None:
            value = file_config.get(name)
        if value is None:
            print(message)
            raw = prompt("").strip()
            try:
                value = float(raw)
            except ValueError:
                raise ValueError(f"{name} must be a number, got '{raw}'") from None
        params[name] = float(value)
    return params


def main(argv: Optional[List[str]] = None, prompt: Callable[[str], str] = input) -> int:
    """Command-line interface for OsciTrace."""
    args = build_parser().parse_args(argv)

    # Import here to avoid slow startup for --version
    import oscitrace as ot
    from oscitrace.errors import NonFiniteResult, OscillatorError

    if args.check:
        requirements = ot.check_system_requirements(verbose=True)
        return EXIT_OK if requirements.get('numpy') and requirements.get('psutil') else EXIT_INVALID

    file_config = {}
    if args.config:
        config_path = Path(args.config)
        if not config_path.exists():
            print(f"Error: Config file not found: {config_path}", file=sys.stderr)
            return EXIT_INVALID
        file_config = load_config_file(config_path)

    verbose = not args.quiet
    if verbose and not any(getattr(args, dest) is not None for dest, _, _ in PARAMETER_FLAGS) \
            and not file_config:
        print("Velocity and position calculator for 1 dimensional particle system. F=-kx default")

    try:
        params = collect_parameters(args, file_config, prompt=prompt)
    except (ValueError, EOFError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID

    output_dir = args.output_dir or file_config.get('output_dir') or ot.get_config().output_dir
    formats = args.formats or file_config.get('formats') or list(ot.get_config().output_formats)

    if args.jax:
        ot.utils.configure_xla_env(preallocate=False, quiet=True)
        ot.configure(use_jax=True)

    try:
        with warnings.catch_warnings():
            if args.quiet:
                warnings.simplefilter("ignore")
            state = ot.ParticleState.from_mapping(params)
    except OscillatorError as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID

    show_progress = ot.get_config().show_progress and not (args.no_progress or args.quiet)
    tracker = ot.create_tracker(
        progress_style="auto" if show_progress else "none",
        use_scan_jit=ot.get_config().use_jax,
    )

    try:
        with ot.utils.timeit("Integration", verbose=verbose):
            trajectory = tracker.track(state)
    except NonFiniteResult as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_NON_FINITE

    try:
        written = ot.write_outputs(trajectory, output_dir=output_dir, formats=formats, verbose=verbose)
    except (ValueError, ImportError, RuntimeError) as e:
        print(f"Error: {e}", file=sys.stderr)
        return EXIT_INVALID

    if args.plot:
        out = Path(output_dir)
        ot.plot_time_series(trajectory, show=False, save_path=out / "time_series.png")
        ot.plot_phase_portrait(trajectory, show=False, save_path=out / "phase_portrait.png")
        written += [out / "time_series.png", out / "phase_portrait.png"]

    if args.report:
        stats, _ = ot.analyze_trajectory_results(trajectory, verbose=verbose)
        written.append(ot.generate_summary_report(trajectory, stats, written=list(written),
                                                  output_dir=output_dir, verbose=verbose))

    if verbose:
        print(f"✅ {trajectory.T} steps written to {Path(output_dir).absolute()}")
    return EXIT_OK


if __name__ == "__main__":
    sys.exit(main())
