"""Terminal display service."""

from .terminal_monitor import TerminalMonitor
from .data_fetcher import DataFetcher, MonitorStatus


def main(argv=None):
    """Entry point for display service."""
    import argparse
    import logging

    from freshwatch.collector import create_reader
    from freshwatch.collector.config.settings import load_config
    from freshwatch.engine import FreshnessEngine
    from freshwatch.exposure import ExposureAccumulator
    from freshwatch.shared.config import ConfigError
    from freshwatch.shared.logging import setup_logging

    parser = argparse.ArgumentParser(description="Show the freshness verdict for the latest fish reading")
    parser.add_argument("--config", help="path to a config-*.yaml file")
    parser.add_argument("--watch", action="store_true", help="keep refreshing at the configured interval")
    parser.add_argument("--no-exposure", action="store_true", help="ignore cumulative temperature exposure")
    args = parser.parse_args(argv)

    try:
        config = load_config(args.config)
    except (FileNotFoundError, ConfigError) as e:
        setup_logging("INFO")
        logging.getLogger(__name__).error(f"Cannot load configuration: {e}")
        return 1

    setup_logging(config.log_level)

    try:
        engine = FreshnessEngine.from_config(config)
        accumulator = None if args.no_exposure else ExposureAccumulator.from_config(config.exposure)
        source = create_reader(config)
    except (ConfigError, ValueError) as e:
        logging.getLogger(__name__).error(f"Invalid configuration: {e}")
        return 1

    fetcher = DataFetcher(source, engine, accumulator)
    monitor = TerminalMonitor(fetcher)

    try:
        monitor.run(config.refresh_interval, watch=args.watch)
    except KeyboardInterrupt:
        pass
    return 0


__all__ = ["TerminalMonitor", "DataFetcher", "MonitorStatus", "main"]
