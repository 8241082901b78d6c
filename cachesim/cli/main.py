from __future__ import annotations
import argparse
from ..config import SimConfig
from ..core.cache_config import ConfigurationError
from ..runtime.simulator import run as run_sim
from ..runtime.sweep import sweep as run_sweep
from ..trace.reader import TraceFormatError
from ..utils.logging import get_logger, set_level
from ..utils.reporting import generate_report, generate_sweep_report

logger = get_logger("cachesim.cli")


def cmd_run(args):
    """Handles the 'run' command."""
    config = SimConfig.from_args(args)
    set_level(config.log_level)
    logger.debug("Simulator configuration: %s", config)

    _, stats = run_sim(config)
    generate_report(stats, config)


def cmd_sweep(args):
    """Handles the 'sweep' command."""
    config = SimConfig.from_args(args)
    set_level(config.log_level)
    logger.debug("Simulator configuration: %s", config)

    rows = run_sweep(config)
    generate_sweep_report(rows, config)


def int_literal(text: str) -> int:
    """Accepts decimal or 0x-prefixed integers."""
    try:
        return int(text, 0)
    except ValueError:
        raise argparse.ArgumentTypeError(f"invalid integer: '{text}'") from None


def int_list(text: str) -> list[int]:
    return [int_literal(item) for item in text.split(",") if item]


def str_list(text: str) -> list[str]:
    return [item.strip() for item in text.split(",") if item.strip()]


def add_cache_arguments(p: argparse.ArgumentParser):
    p.add_argument("-c", "--config", type=str, default=None,
                   help="Path to YAML config file to override defaults")
    p.add_argument("trace", nargs='?', default=None,
                   help="Trace file of '<op> <hex address>' lines (optional if specified in config)")
    p.add_argument("--cache-size", type=int_literal, default=None, dest="cache_size_bytes",
                   help="Total cache capacity in bytes (power of two)")
    p.add_argument("--line-size", type=int_literal, default=None, dest="line_size_bytes",
                   help="Bytes per cache line (power of two)")
    p.add_argument("--report", type=str, default=None, dest="report_dir",
                   help="Directory to save simulation reports")
    p.add_argument("-v", "--verbose", action="store_const", const="DEBUG", default=None, dest="log_level",
                   help="Log every access")


def build_parser():
    p = argparse.ArgumentParser(
        prog="cachesim",
        description="Trace-driven cache hit/miss simulator",
        formatter_class=argparse.ArgumentDefaultsHelpFormatter
    )
    sub = p.add_subparsers(dest="cmd", required=True)

    # --- Run Command ---
    pr = sub.add_parser("run", help="Simulate one cache over a trace",
                        formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    add_cache_arguments(pr)

    org = pr.add_argument_group('Organization')
    org.add_argument("-a", "--associativity", type=int_literal, default=None,
                     help="Lines per set (power of two dividing the line count)")
    org_group = org.add_mutually_exclusive_group()
    org_group.add_argument("-f", "--fully-associative", action="store_const", const="fully-associative",
                           dest="organization", help="One set holding every line")
    org_group.add_argument("-d", "--direct-mapped", action="store_const", const="direct-mapped",
                           dest="organization", help="One line per set")
    org_group.add_argument("-s", "--set-associative", action="store_const", const="set-associative",
                           dest="organization", help="Use --associativity lines per set (from config if omitted)")

    policy_group = pr.add_argument_group('Replacement Policy').add_mutually_exclusive_group()
    policy_group.add_argument("--policy", type=str, default=None, choices=["fifo", "counter", "lru"],
                              help="Replacement policy")
    policy_group.add_argument("--lru", action="store_const", const="counter", dest="policy",
                              help="Legacy flag: hit-counter replacement (same as --policy counter)")
    pr.set_defaults(func=cmd_run)

    # --- Sweep Command ---
    ps = sub.add_parser("sweep", help="Compare associativities and policies over one trace",
                        formatter_class=argparse.ArgumentDefaultsHelpFormatter)
    add_cache_arguments(ps)
    ps.add_argument("--associativities", type=int_list, default=None, dest="sweep_associativities",
                    help="Comma-separated associativities (default: every power of two)")
    ps.add_argument("--policies", type=str_list, default=None, dest="sweep_policies",
                    help="Comma-separated replacement policies")
    ps.set_defaults(func=cmd_sweep)

    return p


def main(argv=None):
    parser = build_parser()
    args = parser.parse_args(argv)
    try:
        args.func(args)
    except (ConfigurationError, TraceFormatError, OSError) as e:
        logger.error("%s", e)
        return 1
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
