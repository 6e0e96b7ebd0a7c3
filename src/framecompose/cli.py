"""CLI for framing photos.

Reads a YAML frame manifest, validates font/logo paths, frames each input
photo, and writes the results.

Usage:
    # Frame a single photo
    python -m framecompose.cli \
        --manifest frame.yaml --output /tmp/framed.jpg photo.jpg

    # Frame many photos into a directory (4 worker threads)
    python -m framecompose.cli \
        --manifest frame.yaml --output-dir /tmp/framed/ --workers 4 *.jpg

    # Validate only (no rendering)
    python -m framecompose.cli --manifest frame.yaml --validate
"""

import argparse
import dataclasses
import logging
import time
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path

import yaml

from .errors import FrameComposeError
from .manifest import load_manifest, validate_paths
from .processor import Processor


# Output extension per --format choice.
FORMAT_EXTENSIONS = {"jpg": ".jpg", "png": ".png"}


# ── Helpers ───────────────────────────────────────────────────────


def _output_name(source: Path, quality: int, fmt: str | None) -> str:
    """Output filename for a batch input: <stem>-framed.<ext>.

    Without --format the extension follows the quality rule.
    """
    if fmt is None:
        fmt = "jpg" if quality < 100 else "png"
    return f"{source.stem}-framed{FORMAT_EXTENSIONS[fmt]}"


def _frame_one(processor: Processor, source: Path, dest: Path):
    """Worker function: frame one photo, return (dest, elapsed seconds)."""
    t0 = time.time()
    processor.process_to_file(source, dest)
    return dest, time.time() - t0


def build_processor(parsed) -> Processor:
    """Load the manifest, apply CLI overrides, construct the processor."""
    config = load_manifest(parsed.manifest)
    if parsed.quality is not None:
        frame = dataclasses.replace(config.frame, quality=parsed.quality)
        config = dataclasses.replace(config, frame=frame)
    validate_paths(config)
    return Processor(config, logo=parsed.logo)


# ── Entry point ───────────────────────────────────────────────────


def main(args=None):
    parser = argparse.ArgumentParser(
        description="Frame photos with a border, caption strip, and logo.",
    )
    parser.add_argument(
        "inputs", nargs="*", type=Path,
        help="Source photos",
    )
    parser.add_argument(
        "--manifest", required=True,
        help="Path to the YAML frame manifest",
    )
    parser.add_argument(
        "--output", default=None, type=Path,
        help="Output file (single input only)",
    )
    parser.add_argument(
        "--output-dir", default=None, type=Path,
        help="Output directory for one or more inputs",
    )
    parser.add_argument(
        "--quality", type=int, default=None,
        help="Override frame.quality (1-100; 100 = lossless PNG)",
    )
    parser.add_argument(
        "--format", choices=sorted(FORMAT_EXTENSIONS), default=None,
        help="Output format for --output-dir (default follows quality)",
    )
    parser.add_argument(
        "--logo", default=None,
        help="Logo image, overrides logo.path from the manifest",
    )
    parser.add_argument(
        "--workers", type=int, default=1,
        help="Number of photos framed in parallel (default: 1)",
    )
    parser.add_argument(
        "--force", action="store_true",
        help="Overwrite existing output files",
    )
    parser.add_argument(
        "--validate", action="store_true",
        help="Validate manifest and resources, then exit",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Log pipeline details",
    )
    parsed = parser.parse_args(args)

    if parsed.verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if parsed.quality is not None and not 1 <= parsed.quality <= 100:
        parser.error("--quality must be between 1 and 100")
    if parsed.workers < 1:
        parser.error("--workers must be >= 1")

    try:
        processor = build_processor(parsed)
    except (FrameComposeError, ValueError, FileNotFoundError, yaml.YAMLError) as e:
        parser.exit(1, f"Error: {e}\n")

    if parsed.validate:
        print(f"Manifest OK: {parsed.manifest}")
        return

    if not parsed.inputs:
        parser.error("No input photos given")
    if parsed.output is not None and parsed.output_dir is not None:
        parser.error("Use either --output or --output-dir, not both")
    if parsed.output is not None and len(parsed.inputs) != 1:
        parser.error("--output takes exactly one input; use --output-dir for several")
    if parsed.output is None and parsed.output_dir is None:
        parser.error("Specify --output or --output-dir")

    # Plan (source, dest) jobs.
    if parsed.output is not None:
        jobs = [(parsed.inputs[0], parsed.output)]
    else:
        quality = processor.config.frame.quality
        jobs = [
            (src, parsed.output_dir / _output_name(src, quality, parsed.format))
            for src in parsed.inputs
        ]

    if not parsed.force:
        existing = [str(dest) for _, dest in jobs if dest.exists()]
        if existing:
            parser.error(
                f"{len(existing)} output file(s) already exist (use --force): "
                + ", ".join(existing)
            )

    print(f"Framing {len(jobs)} photo(s) with {parsed.workers} worker(s)...")
    t_start = time.time()
    failures = []

    # One Processor is shared by all workers; each call owns its canvas.
    with ThreadPoolExecutor(max_workers=parsed.workers) as pool:
        futures = {
            pool.submit(_frame_one, processor, src, dest): src
            for src, dest in jobs
        }
        for future in as_completed(futures):
            src = futures[future]
            try:
                dest, elapsed = future.result()
            except FrameComposeError as e:
                failures.append(src)
                print(f"  FAILED {src}: {e}")
            else:
                print(f"  {src} -> {dest} ({elapsed:.1f}s)")

    total = time.time() - t_start
    done = len(jobs) - len(failures)
    print(f"Done: {done}/{len(jobs)} framed in {total:.1f}s")
    if failures:
        parser.exit(1, f"{len(failures)} photo(s) failed\n")


if __name__ == "__main__":
    main()
