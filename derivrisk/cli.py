"""
Command-line interface for the derivatives path simulator.
"""

import argparse
import json
import sys
from pathlib import Path
from typing import List, Optional
from derivrisk import config
from derivrisk.params import InvalidParameterError
from derivrisk.service import simulate_fx_forward, simulate_gbm, simulate_ou


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    """Parse command-line arguments.

    Parameters
    ----------
    argv : list of str, optional
        Arguments to parse. If None, ``sys.argv[1:]`` is used.

    Returns
    -------
    argparse.Namespace
        Parsed command-line arguments
    """
    defaults = config.load_defaults()

    common = argparse.ArgumentParser(add_help=False)
    common.add_argument(
        "--paths",
        type=int,
        default=defaults.paths,
        help=f"Number of Monte Carlo paths (default: {defaults.paths})",
    )
    common.add_argument(
        "--steps",
        type=int,
        default=defaults.steps,
        help=f"Number of time steps per path (default: {defaults.steps})",
    )
    common.add_argument(
        "--seed",
        type=int,
        default=defaults.seed,
        help="Random seed for a reproducible run (default: random)",
    )
    common.add_argument(
        "--json",
        type=str,
        default=None,
        help="Write the result payload as JSON to this path ('-' for stdout)",
    )
    common.add_argument(
        "--output",
        type=str,
        default=None,
        help="Path to save the chart (optional)",
    )
    common.add_argument(
        "--no-plot",
        action="store_true",
        help="Do not draw a chart even if --output is given",
    )
    common.add_argument(
        "--verbose",
        action="store_true",
        help="Enable debug logging",
    )

    parser = argparse.ArgumentParser(
        description="Simulate GBM, Ornstein-Uhlenbeck and FX forward paths",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s gbm --paths 500 --mu 0.05 --sigma 0.3 --output gbm.png
  %(prog)s ou --kappa 2.0 --theta 1.2 --json ou.json
  %(prog)s fx-forward --model ou --spot 1.08 --r-dom 0.04 --json -
        """,
    )
    parser.add_argument(
        "--log-level",
        type=str,
        default=defaults.log_level,
        choices=config.LOG_LEVELS,
        help=f"Logging level (default: {defaults.log_level})",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    gbm = subparsers.add_parser("gbm", parents=[common], help="Geometric Brownian motion")
    gbm.add_argument("--s0", type=float, default=config.DEFAULT_S0, help="Initial value (default: 100.0)")
    gbm.add_argument("--mu", type=float, default=config.DEFAULT_MU, help="Annualized drift (default: 0.08)")
    gbm.add_argument("--sigma", type=float, default=config.DEFAULT_SIGMA, help="Annualized volatility (default: 0.20)")
    gbm.add_argument("--t", type=float, default=defaults.horizon, help=f"Horizon in years (default: {defaults.horizon})")

    ou = subparsers.add_parser("ou", parents=[common], help="Ornstein-Uhlenbeck process")
    ou.add_argument("--x0", type=float, default=config.DEFAULT_X0, help="Initial value (default: 1.0)")
    ou.add_argument("--kappa", type=float, default=config.DEFAULT_KAPPA, help="Mean reversion speed (default: 3.0)")
    ou.add_argument("--theta", type=float, default=config.DEFAULT_THETA, help="Long-term mean (default: 1.0)")
    ou.add_argument("--sigma", type=float, default=config.DEFAULT_OU_SIGMA, help="Volatility (default: 0.15)")
    ou.add_argument("--t", type=float, default=defaults.horizon, help=f"Horizon in years (default: {defaults.horizon})")

    fx = subparsers.add_parser("fx-forward", parents=[common], help="FX forward present value")
    fx.add_argument(
        "--model",
        type=str,
        default=config.DEFAULT_FX_MODEL,
        help="Spot dynamics: 'gbm' or 'ou' (default: gbm)",
    )
    fx.add_argument("--spot", type=float, default=config.DEFAULT_SPOT, help="FX spot (default: 1.10)")
    fx.add_argument("--maturity", type=float, default=defaults.horizon, help=f"Maturity in years (default: {defaults.horizon})")
    fx.add_argument("--r-dom", type=float, default=config.DEFAULT_R_DOM, help="Domestic rate (default: 0.03)")
    fx.add_argument("--r-for", type=float, default=config.DEFAULT_R_FOR, help="Foreign rate (default: 0.01)")
    fx.add_argument("--kappa", type=float, default=config.DEFAULT_FX_KAPPA, help="OU mean reversion speed (default: 3.0)")
    fx.add_argument("--theta", type=float, default=config.DEFAULT_FX_THETA, help="OU long-term mean (default: 1.10)")
    fx.add_argument("--sigma-ou", type=float, default=config.DEFAULT_FX_SIGMA_OU, help="OU volatility (default: 0.12)")
    fx.add_argument("--sigma-gbm", type=float, default=config.DEFAULT_FX_SIGMA_GBM, help="GBM volatility (default: 0.15)")
    fx.add_argument(
        "--include-paths",
        action="store_true",
        help="Include raw spot and PV paths in the JSON payload",
    )

    return parser.parse_args(argv)


def validate_args(args: argparse.Namespace) -> None:
    """Validate command-line arguments.

    Parameters
    ----------
    args : argparse.Namespace
        Parsed command-line arguments

    Raises
    ------
    ValueError
        If an output directory does not exist
    """
    for option in ("output", "json"):
        target = getattr(args, option, None)
        if target and target != "-":
            output_path = Path(target)
            if not output_path.parent.exists():
                raise ValueError(
                    f"Output directory does not exist: {output_path.parent}"
                )


def run_simulation(args: argparse.Namespace):
    """Dispatch to the operation selected on the command line."""
    if args.command == "gbm":
        return simulate_gbm(
            paths=args.paths,
            steps=args.steps,
            s0=args.s0,
            mu=args.mu,
            sigma=args.sigma,
            t=args.t,
            seed=args.seed,
        )
    if args.command == "ou":
        return simulate_ou(
            paths=args.paths,
            steps=args.steps,
            x0=args.x0,
            kappa=args.kappa,
            theta=args.theta,
            sigma=args.sigma,
            t=args.t,
            seed=args.seed,
        )
    return simulate_fx_forward(
        model=args.model,
        paths=args.paths,
        steps=args.steps,
        spot=args.spot,
        maturity=args.maturity,
        r_dom=args.r_dom,
        r_for=args.r_for,
        kappa=args.kappa,
        theta=args.theta,
        sigma_ou=args.sigma_ou,
        sigma_gbm=args.sigma_gbm,
        seed=args.seed,
    )


def write_payload(payload: dict, target: str) -> None:
    """Write a JSON payload to a file, or to stdout when target is '-'."""
    text = json.dumps(payload, indent=2)
    if target == "-":
        print(text)
    else:
        Path(target).write_text(text)


def print_summary(args: argparse.Namespace, result) -> None:
    """Print a short summary of a run (to stderr when JSON goes to stdout)."""
    stream = sys.stderr if args.json == "-" else sys.stdout

    print("=" * 60, file=stream)
    if args.command == "fx-forward":
        terminal_spot = result.underlying_stats[-1]
        terminal_pv = result.pv_stats[-1]
        print(f"FX forward ({args.model}) | {args.paths} paths x {args.steps} steps", file=stream)
        print(f"Spot: {args.spot:.4f} | Forward at T0: {result.forward_at_inception:.6f}", file=stream)
        print(
            f"Spot at maturity: mean {terminal_spot.mean:.6f} "
            f"[p5 {terminal_spot.p5:.6f}, p95 {terminal_spot.p95:.6f}]",
            file=stream,
        )
        print(
            f"PV at maturity:   mean {terminal_pv.mean:.6f} "
            f"[p5 {terminal_pv.p5:.6f}, p95 {terminal_pv.p95:.6f}]",
            file=stream,
        )
    else:
        terminal = result.paths[:, -1]
        print(f"{args.command.upper()} | {args.paths} paths x {args.steps} steps", file=stream)
        print(f"Initial value: {result.paths[0, 0]:.4f}", file=stream)
        print(f"Terminal mean: {terminal.mean():.4f}", file=stream)
        print(f"Terminal range: {terminal.min():.4f} .. {terminal.max():.4f}", file=stream)
    print("=" * 60, file=stream)


def render_chart(args: argparse.Namespace, result) -> None:
    from derivrisk.visualization import plot_fx_forward, plot_paths

    if args.command == "fx-forward":
        plot_fx_forward(result, output_path=args.output)
    else:
        title = "Geometric Brownian Motion" if args.command == "gbm" else "Ornstein-Uhlenbeck"
        plot_paths(result.paths, result.time_grid, title=title, output_path=args.output)


def main(argv: Optional[List[str]] = None) -> int:
    """Main entry point for the CLI.

    Returns
    -------
    int
        Exit code (0 success, 2 invalid parameters, 130 interrupted, 1 error)
    """
    try:
        args = parse_args(argv)
        config.configure_logging("DEBUG" if args.verbose else args.log_level)
        validate_args(args)

        result = run_simulation(args)
        print_summary(args, result)

        if args.json:
            if args.command == "fx-forward":
                payload = result.to_dict(include_paths=args.include_paths)
            else:
                payload = result.to_dict()
            write_payload(payload, args.json)

        if args.output and not args.no_plot:
            render_chart(args, result)
            print(f"Plot saved to: {args.output}", file=sys.stderr if args.json == "-" else sys.stdout)

        return 0

    except InvalidParameterError as e:
        print(f"Invalid parameters: {e}", file=sys.stderr)
        return 2
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        return 130
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        import traceback
        traceback.print_exc()
        return 1


if __name__ == "__main__":
    sys.exit(main())
