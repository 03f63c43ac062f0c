import argparse
import json
import signal
import sys
from pathlib import Path
from typing import Dict, Any

import yaml
from tqdm import tqdm

from artifacts.logger import RunLogger
from domain.constants import COPY_MODES, DEFAULT_PATHS, MODE_BYTE, PROGRESS_UPDATE_INTERVAL, DEFAULT_ENCODING
from domain.models import CopyConfig, TransferRequest
from services.run_service import TransferRunner


# ---------------------------
# Helpers
# ---------------------------

def load_config(path: str | None) -> Dict[str, Any]:
    if not path:
        return {}

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if p.suffix.lower() in (".yaml", ".yml"):
        return yaml.safe_load(p.read_text()) or {}

    return json.loads(p.read_text())


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if v is not None:
            out[k] = v
    return out


def build_copy_config(cfg: Dict[str, Any]) -> CopyConfig:
    mode = cfg.get("mode", MODE_BYTE)
    if mode not in COPY_MODES:
        raise ValueError(f"Unknown mode in config: {mode}")
    return CopyConfig(
        progress_interval=int(cfg.get("progress_interval", PROGRESS_UPDATE_INTERVAL)),
        backup=bool(cfg.get("backup", True)),
        mode=mode,
        encoding=str(cfg.get("encoding", DEFAULT_ENCODING)),
        log_file=cfg.get("log_file"),
    )


def tqdm_enabled() -> bool:
    return sys.stderr.isatty()


class StopFlag:
    """Set by SIGINT; polled by the copy loop between units."""

    def __init__(self):
        self.stopped = False

    def __call__(self) -> bool:
        return self.stopped

    def set(self, *_):
        self.stopped = True


# ---------------------------
# CLI main
# ---------------------------

def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="StreamCopy",
        description="Copy a file one byte (or character) at a time"
    )

    parser.add_argument("source", nargs="?", help="Source file (default: demo path)")
    parser.add_argument("dest", nargs="?", help="Destination file (default: demo path)")

    parser.add_argument("--config", help="Config file (json or yaml)")
    parser.add_argument("--mode", choices=sorted(COPY_MODES), help="Copy unit (default: byte)")
    parser.add_argument("--encoding", help="Text encoding for char mode")
    parser.add_argument("--progress-interval", type=int, help="Units between throughput samples")
    parser.add_argument("--no-backup", action="store_false", dest="backup", default=None,
                        help="Do not snapshot an existing destination")
    parser.add_argument("--log-file", help="Also append log lines to this file")
    return parser


def main(argv=None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg_file = load_config(args.config)
        cfg = merge_config(cfg_file, {
            "source": args.source,
            "dest": args.dest,
            "mode": args.mode,
            "encoding": args.encoding,
            "progress_interval": args.progress_interval,
            "backup": args.backup,
            "log_file": args.log_file,
        })
        copy_cfg = build_copy_config(cfg)
    except (OSError, ValueError, yaml.YAMLError) as e:
        parser.error(str(e))

    default_src, default_dst = DEFAULT_PATHS[copy_cfg.mode]
    request = TransferRequest(
        source_path=str(cfg.get("source") or default_src),
        destination_path=str(cfg.get("dest") or default_dst),
        mode=copy_cfg.mode,
        encoding=copy_cfg.encoding,
    )

    logger = RunLogger(copy_cfg.log_file)
    try:
        runner = TransferRunner(logger, copy_cfg)
    except ValueError as e:
        parser.error(str(e))

    stop = StopFlag()
    previous = signal.signal(signal.SIGINT, stop.set)

    bar = tqdm(
        desc="Copy",
        unit="B",
        unit_scale=True,
        dynamic_ncols=True,
        disable=not tqdm_enabled(),
    )
    _last = 0

    def progress(done, total, rate):
        nonlocal _last
        if bar.disable:
            logger.info(f"Progress: {done}/{total} bytes ({rate:.1f} B/s)")
            return
        if bar.total is None:
            bar.reset(total=total)
        bar.update(done - _last)
        _last = done

    try:
        outcome = runner.run(request, stop_flag=stop, progress_cb=progress)
    finally:
        bar.close()
        signal.signal(signal.SIGINT, previous)

    if outcome.ok:
        logger.info("Transfer completed successfully.")
        return 0
    logger.error("Transfer failed.")
    return 1


if __name__ == "__main__":
    sys.exit(main())
