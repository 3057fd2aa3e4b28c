"""Command-line interface for contact extraction and CSV export.

Provides subcommands for processing folders of scanned images into a CSV,
extracting a single image to JSON, and running the extraction engine over
text that was recognized elsewhere.
"""

import argparse
import csv
import json
import sys
import time
from pathlib import Path

from contact_ocr.extraction.engine import ExtractionResult, build_result
from contact_ocr.ocr.document_processor import DocumentProcessor
from contact_ocr.ocr.engine import OCRError
from contact_ocr.utils.config import AppConfig, load_config
from contact_ocr.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_SUPPORTED_EXTENSIONS = {
    ".png",
    ".jpg",
    ".jpeg",
    ".tiff",
    ".tif",
    ".bmp",
    ".gif",
    ".webp",
}
_CSV_COLUMNS = [
    "filename",
    "status",
    "name",
    "address",
    "phone_number",
    "confidence",
    "processing_time_s",
    "error",
]


def _find_documents(input_dir: Path) -> list[Path]:
    """Find all supported image files in a directory.

    Args:
        input_dir: Directory to scan for images.

    Returns:
        Sorted list of image file paths.
    """
    return sorted(
        path
        for path in input_dir.iterdir()
        if path.is_file() and path.suffix.lower() in _SUPPORTED_EXTENSIONS
    )


def _load_config(engine: str | None) -> AppConfig:
    config = load_config()
    if engine:
        config.ocr.engine = engine
    return config


def _result_to_dict(result: ExtractionResult) -> dict[str, object]:
    return {
        "name": result.fields.name,
        "address": result.fields.address,
        "phone_number": result.fields.phone_number,
        "confidence": result.confidence,
    }


def process_folder(
    input_dir: Path,
    output_csv: Path,
    engine: str | None = None,
    verbose: bool = False,
) -> dict[str, int]:
    """Process all images in a folder and export contact fields to CSV.

    Args:
        input_dir: Directory containing image files.
        output_csv: Path for the output CSV file.
        engine: OCR engine override (``tesseract`` or ``vision``).
        verbose: Whether to print per-file progress.

    Returns:
        Summary dict with total, successful, and failed counts.
    """
    files = _find_documents(input_dir)
    if not files:
        logger.warning("No documents found in %s", input_dir)
        return {"total": 0, "successful": 0, "failed": 0}

    logger.info("Found %d documents to process", len(files))
    processor = DocumentProcessor(_load_config(engine))

    rows: list[dict[str, object]] = []
    for i, file_path in enumerate(files, 1):
        if verbose:
            print(f"Processing [{i}/{len(files)}]: {file_path.name}")

        start_time = time.time()
        item = processor.process_batch([(file_path.name, file_path)])[0]
        row: dict[str, object] = {
            "filename": item.filename,
            "processing_time_s": round(time.time() - start_time, 2),
        }
        if item.result is not None:
            row["status"] = "success"
            row.update(_result_to_dict(item.result))
        else:
            row["status"] = "failed"
            row["error"] = item.error
        rows.append(row)

    _write_csv(rows, output_csv)
    logger.info("Results written to %s", output_csv)

    failed = sum(1 for r in rows if r["status"] == "failed")
    summary = {"total": len(files), "successful": len(files) - failed, "failed": failed}
    _print_summary(summary, output_csv)
    return summary


def _write_csv(rows: list[dict[str, object]], output_path: Path) -> None:
    """Write extraction rows to a CSV file.

    Args:
        rows: One dictionary per processed document.
        output_path: Path for the output CSV file.
    """
    if not rows:
        return

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=_CSV_COLUMNS, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)


def _print_summary(summary: dict[str, int], output_csv: Path) -> None:
    """Print batch processing summary to stdout.

    Args:
        summary: Counts of total, successful, and failed documents.
        output_csv: Path to the output CSV.
    """
    print(f"\n{'=' * 50}")
    print("Batch Processing Complete")
    print(f"{'=' * 50}")
    print(f"Total:      {summary['total']}")
    print(f"Successful: {summary['successful']}")
    print(f"Failed:     {summary['failed']}")
    print(f"Output:     {output_csv}")


def extract_single(file_path: Path, engine: str | None = None) -> dict[str, object]:
    """Process a single image and return its contact fields.

    Args:
        file_path: Path to the image file.
        engine: OCR engine override (``tesseract`` or ``vision``).

    Returns:
        Dictionary with filename, fields, and raw_text.

    Raises:
        OCRError: If recognition fails.
    """
    processor = DocumentProcessor(_load_config(engine))
    doc_result = processor.process(file_path, file_path.name)
    result = doc_result.result
    fields = _result_to_dict(result)
    confidence = fields.pop("confidence")

    return {
        "filename": file_path.name,
        "fields": fields,
        "confidence": confidence,
        "no_data_found": result.no_data_found,
        "raw_text": result.raw_text,
    }


def extract_text(text: str) -> dict[str, object]:
    """Run the extraction engine over already recognized text."""
    result = build_result(text)
    fields = _result_to_dict(result)
    fields.pop("confidence")
    return {"fields": fields, "no_data_found": result.no_data_found}


def _emit(result: dict[str, object], output: Path | None) -> None:
    output_str = json.dumps(result, indent=2)
    if output:
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(output_str)
        print(f"Output written to {output}")
    else:
        print(output_str)


def main(argv: list[str] | None = None) -> None:
    """Parse CLI arguments and dispatch to the appropriate command.

    Args:
        argv: Command-line arguments (defaults to sys.argv).
    """
    parser = argparse.ArgumentParser(
        description="Contact OCR: extract names, addresses and phone numbers",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    batch_parser = subparsers.add_parser("batch", help="Process a folder of images")
    batch_parser.add_argument(
        "input_dir", type=Path, help="Input directory with images"
    )
    batch_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("results.csv"),
        help="Output CSV file (default: results.csv)",
    )
    batch_parser.add_argument(
        "-e",
        "--engine",
        choices=["tesseract", "vision"],
        help="OCR engine (default: from config)",
    )
    batch_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )

    single_parser = subparsers.add_parser("extract", help="Process a single image")
    single_parser.add_argument("file", type=Path, help="Image file to process")
    single_parser.add_argument(
        "-e",
        "--engine",
        choices=["tesseract", "vision"],
        help="OCR engine (default: from config)",
    )
    single_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    text_parser = subparsers.add_parser(
        "text", help="Extract fields from recognized text (file or stdin)"
    )
    text_parser.add_argument(
        "file", type=Path, nargs="?", help="Text file (default: read stdin)"
    )
    text_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    args = parser.parse_args(argv)

    setup_logging()

    if args.command == "batch":
        if not args.input_dir.is_dir():
            print(f"Error: {args.input_dir} is not a directory", file=sys.stderr)
            sys.exit(1)
        process_folder(args.input_dir, args.output, args.engine, args.verbose)
    elif args.command == "extract":
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        try:
            result = extract_single(args.file, args.engine)
        except OCRError as exc:
            print(f"Error: OCR failed for {args.file}: {exc}", file=sys.stderr)
            sys.exit(2)
        _emit(result, args.output)
    elif args.command == "text":
        if args.file is not None and not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        if args.file is not None:
            text = args.file.read_text(encoding="utf-8", errors="replace")
        else:
            text = sys.stdin.read()
        _emit(extract_text(text), args.output)
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
