"""Command line entry point: build a network and verify its gradients."""

from __future__ import annotations

import argparse
import json
import logging
from pathlib import Path
from typing import Iterable

import numpy as np

from . import config as net_config
from .core.activations import available_activations
from .training.gradcheck import gradcheck

logger = logging.getLogger("annkit")


def parse_args(argv: Iterable[str] | None = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(description=__doc__)
    parser.add_argument(
        "--preset",
        choices=sorted(net_config.presets().keys()),
        default="xor",
        help="Preset network to build",
    )
    parser.add_argument("--config", type=Path, help="JSON/YAML network config (overrides --preset)")
    parser.add_argument("--seed", type=int, help="Seed for weights and the probe example")
    parser.add_argument("--eps", type=float, default=1e-6, help="Finite-difference step")
    parser.add_argument("--atol", type=float, default=1e-4, help="Maximum absolute gradient error")
    parser.add_argument(
        "--list-presets", action="store_true", help="List available presets and exit"
    )
    parser.add_argument(
        "--list-activations",
        action="store_true",
        help="List registered activation functions and exit",
    )
    parser.add_argument("--verbose", action="store_true", help="Enable debug logging")
    return parser.parse_args(argv)


def main(argv: Iterable[str] | None = None) -> int:
    args = parse_args(argv)
    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.WARNING)

    if args.list_presets:
        for name in sorted(net_config.presets().keys()):
            print(name)
        return 0

    if args.list_activations:
        for name in available_activations():
            print(name)
        return 0

    if args.config:
        cfg = net_config.read_config_file(args.config)
        source = str(args.config)
    else:
        cfg = net_config.load_preset(args.preset)
        source = args.preset

    net = net_config.build_net(cfg, seed=args.seed)
    seed = args.seed if args.seed is not None else cfg.get("seed")
    rng = np.random.default_rng(None if seed is None else int(seed) + 1)
    x = rng.standard_normal(net.input_info.units)
    target = rng.uniform(0.0, 1.0, net.output_info.units)
    if net.loss.name == "ce":
        target = target / target.sum()

    result = gradcheck(net, x, target, eps=args.eps, atol=args.atol)
    logger.info("Gradient check on %s: max abs error %.3g", source, result.max_abs_error)
    payload = {
        "source": source,
        "layers": list(net.describe()),
        "parameters": net.parameters.size,
        "max_abs_error": result.max_abs_error,
        "passed": result.passed,
    }
    print(json.dumps(payload, sort_keys=True))
    return 0 if result.passed else 1


if __name__ == "__main__":
    raise SystemExit(main())
