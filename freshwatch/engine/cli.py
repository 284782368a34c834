"""Command line evaluation of a single reading."""

import argparse
import json
import logging
import sys
from dataclasses import replace

from freshwatch.shared.config import ConfigError
from freshwatch.shared.logging import setup_logging
from freshwatch.shared.models import SensorReading

from .engine import FreshnessEngine
from .observer import LoggingObserver
from .profiles import BUILTIN_PROFILES, get_profile, profile_from_config
from .verdict import VerdictPolicy

logger = logging.getLogger(__name__)


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(description="Evaluate the freshness of one fish reading")
    p.add_argument("--color", type=float, help="colour/brightness value")
    p.add_argument("--gas", type=float, help="volatile gas value")
    p.add_argument("--temperature", type=float, help="fish temperature in Celsius (monitoring only)")
    p.add_argument("--color-label", help="status text entered for colour")
    p.add_argument("--gas-label", help="status text entered for gas")
    p.add_argument("--profile", choices=sorted(BUILTIN_PROFILES), help="built-in scoring profile")
    p.add_argument("--policy", choices=[policy.value for policy in VerdictPolicy], help="verdict policy override")
    p.add_argument("--config", help="config file whose profile section is used")
    p.add_argument("--subject", default=None, help="name used in the guidance text")
    p.add_argument("--debug", action="store_true", help="log intermediate scores")
    return p


def main(argv=None) -> int:
    args = build_parser().parse_args(argv)
    setup_logging("DEBUG" if args.debug else "WARNING")

    subject = args.subject
    try:
        profile = get_profile(args.profile)
        if args.config:
            from freshwatch.collector.config.settings import load_config

            config = load_config(args.config)
            subject = subject or config.subject
            # An explicit --profile wins over the config file
            if not args.profile:
                profile = profile_from_config(config.profile)
        if args.policy:
            profile = replace(profile, verdict_policy=VerdictPolicy.parse(args.policy))
    except (FileNotFoundError, ConfigError) as e:
        logger.error(f"Cannot load profile: {e}")
        return 1

    engine = FreshnessEngine(profile=profile, observer=LoggingObserver(), subject=subject or "The fish")
    reading = SensorReading(
        temperature=args.temperature,
        gas_value=args.gas,
        color_value=args.color,
        color_label=args.color_label,
        gas_label=args.gas_label,
    )
    assessment = engine.evaluate(reading)
    json.dump(assessment.to_dict(), sys.stdout, indent=2, ensure_ascii=False)
    sys.stdout.write("\n")
    return 0


if __name__ == "__main__":
    sys.exit(main())
