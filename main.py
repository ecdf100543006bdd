# main.py
import argparse
import sys

from sp_trace.app.build import build
from sp_trace.io.config import load_scenario
from sp_trace.io.engine_logging import _default_json_logger


def run(cfg_path: str, start_id: int, end_id: int) -> int:
    cfg = load_scenario(cfg_path)
    # stdout carries only replay frames; engine logs go to stderr
    log = _default_json_logger("sp_trace.cli", level=cfg.log.level, stream=sys.stderr)
    log.propagate = False
    app = build(cfg, logger=log)
    result = app.find_path(start_id, end_id)
    app.play(result)
    return 0 if result.reachable else 1


def main(argv=None) -> int:
    ap = argparse.ArgumentParser(description="Shortest path with a replayable exploration trace")
    ap.add_argument("config", help="scenario JSON file")
    ap.add_argument("start", type=int, help="start node id")
    ap.add_argument("end", type=int, help="end node id")
    args = ap.parse_args(argv)
    return run(args.config, args.start, args.end)


if __name__ == "__main__":
    sys.exit(main())
