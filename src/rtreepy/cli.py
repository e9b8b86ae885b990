"""Standalone regression tree trainer.

Usage::

    rtreepy-train -r data.attr -t train.txt [-o model.txt] [-m a:0.01] [-s 0]
"""
from __future__ import annotations
from time import perf_counter
from typing import Optional, Sequence
import argparse
import logging
import sys

from .config import DEFAULT_MODE, parse_mode
from .exceptions import ConfigurationError
from .growth import build_tree
from .io import read_instances, write_model
from .rng import Random
from .sampling import create_bootstrap_sample

logger = logging.getLogger(__name__)


def make_parser() -> argparse.ArgumentParser:
    ap = argparse.ArgumentParser(prog="rtreepy-train", description="Train a regression tree")
    ap.add_argument("-r", "--attribute-file", required=True, help="attribute file path")
    ap.add_argument("-t", "--train-file", required=True, help="train set path")
    ap.add_argument("-o", "--output-model", default=None, help="output model path")
    ap.add_argument("-m", "--mode", default=DEFAULT_MODE,
                    help="construction mode:parameter. Construction mode can be alpha limited (a), "
                         "depth limited (d), and number of leaves limited (l) "
                         f"(default: {DEFAULT_MODE})")
    ap.add_argument("-s", "--seed", type=int, default=0,
                    help="seed of the random number generator (default: 0)")
    ap.add_argument("--no-bootstrap", action="store_true",
                    help="train on the full training set instead of a bootstrap sample")
    ap.add_argument("-v", "--verbose", action="count", default=0,
                    help="log progress (-v info, -vv debug)")
    return ap


def main(argv: Optional[Sequence[str]] = None) -> int:
    ap = make_parser()
    args = ap.parse_args(argv)
    try:
        config = parse_mode(args.mode)
    except ConfigurationError as e:
        ap.print_usage(sys.stderr)
        print(f"{ap.prog}: error: {e}", file=sys.stderr)
        return 1

    level = logging.WARNING - 10 * min(args.verbose, 2)
    logging.basicConfig(level=level, format="%(asctime)s %(name)s %(levelname)s %(message)s")

    rng = Random(args.seed)
    instances = read_instances(args.attribute_file, args.train_file)
    logger.info("read %d instances with %d attributes", len(instances), instances.n_features)
    if not args.no_bootstrap:
        instances = create_bootstrap_sample(instances, rng)

    start = perf_counter()
    tree = build_tree(instances, config, rng)
    print(f"Time: {perf_counter() - start:.3f} (s).")

    if args.output_model is not None:
        write_model(tree, args.output_model)
        logger.info("model written to %s", args.output_model)
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
