"""Command-line interface for classifying documents and exporting results.

Provides subcommands for classifying OCR transcripts, scanning a single
document photo, and sorting a folder of photos into a CSV report.
"""

import argparse
import csv
import json
import sys
from pathlib import Path

from src.ocr.tesseract_engine import TesseractEngine, load_image
from src.pipeline import DocumentPipeline
from src.utils.config import AppConfig, load_config
from src.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

_SUPPORTED_EXTENSIONS = ("*.png", "*.jpg", "*.jpeg", "*.tiff", "*.tif")
_META_COLUMNS = [
    "filename",
    "status",
    "docType",
    "category",
    "subFolder",
    "error",
]


def _find_documents(input_dir: Path) -> list[Path]:
    """Find all supported image files in a directory.

    Args:
        input_dir: Directory to scan for document photos.

    Returns:
        Sorted list of image paths.
    """
    files: list[Path] = []
    for ext in _SUPPORTED_EXTENSIONS:
        files.extend(input_dir.glob(ext))
        files.extend(input_dir.glob(ext.upper()))
    return sorted(set(files))


def _make_engine(config: AppConfig) -> TesseractEngine:
    return TesseractEngine(
        tesseract_cmd=config.ocr.tesseract_cmd,
        default_lang=config.ocr.default_lang,
    )


def classify_files(paths: list[Path], pipeline: DocumentPipeline) -> list[dict]:
    """Classify OCR transcripts stored as text files.

    A path of ``-`` reads the transcript from standard input.

    Args:
        paths: Transcript files.
        pipeline: Pipeline used for every file.

    Returns:
        One serialized result per file, tagged with its filename.
    """
    results: list[dict] = []
    for path in paths:
        if str(path) == "-":
            raw = sys.stdin.buffer.read()
            name = "<stdin>"
        else:
            raw = path.read_bytes()
            name = path.name
        results.append({"filename": name, **pipeline.process(raw).to_dict()})
    return results


def scan_image(
    file_path: Path, config: AppConfig, lang: str | None = None
) -> dict[str, object]:
    """OCR a single document photo and classify it.

    Args:
        file_path: Path to the image.
        config: Application configuration.
        lang: OCR language override.

    Returns:
        Serialized result with filename and raw transcript.
    """
    engine = _make_engine(config)
    pipeline = DocumentPipeline(config.classification)

    ocr_result = engine.extract_text(
        load_image(file_path), lang=lang, psm=config.ocr.psm
    )
    result = pipeline.process(ocr_result.text)
    return {
        "filename": file_path.name,
        **result.to_dict(),
        "ocrConfidence": round(ocr_result.confidence, 3),
        "rawText": ocr_result.text,
    }


def process_folder(
    input_dir: Path,
    output_csv: Path,
    config: AppConfig,
    verbose: bool = False,
) -> dict[str, int]:
    """Classify every document photo in a folder and export a CSV.

    Args:
        input_dir: Directory containing document photos.
        output_csv: Path for the output CSV file.
        config: Application configuration.
        verbose: Whether to print per-file progress.

    Returns:
        Summary dict with total, successful, and failed counts.
    """
    engine = _make_engine(config)
    pipeline = DocumentPipeline(config.classification)

    files = _find_documents(input_dir)
    if not files:
        logger.warning("No documents found in %s", input_dir)
        return {"total": 0, "successful": 0, "failed": 0}

    logger.info("Found %d documents to process", len(files))

    rows: list[dict[str, object]] = []
    successful = 0
    failed = 0

    for i, file_path in enumerate(files, 1):
        if verbose:
            print(f"Processing [{i}/{len(files)}]: {file_path.name}")

        try:
            result = pipeline.process_image(
                load_image(file_path), engine, psm=config.ocr.psm
            )
            row: dict[str, object] = {
                "filename": file_path.name,
                "status": "success",
                "docType": result.doc_type.value,
                "category": result.category.value,
                "subFolder": result.sub_folder,
                "error": None,
            }
            row.update(result.extracted_fields.to_dict())
            rows.append(row)
            successful += 1
        except Exception as exc:
            logger.error("Failed to process %s: %s", file_path.name, exc)
            rows.append(
                {
                    "filename": file_path.name,
                    "status": "failed",
                    "error": str(exc),
                }
            )
            failed += 1

    _write_csv(rows, output_csv)
    logger.info("Results written to %s", output_csv)

    summary = {"total": len(files), "successful": successful, "failed": failed}
    _print_summary(summary, output_csv)
    return summary


def _write_csv(rows: list[dict[str, object]], output_path: Path) -> None:
    """Write classification rows to a CSV file.

    Metadata columns come first, followed by extracted fields in
    alphabetical order.
    """
    if not rows:
        return

    all_keys: set[str] = set()
    for r in rows:
        all_keys.update(r.keys())

    field_columns = sorted(all_keys - set(_META_COLUMNS))
    columns = [c for c in _META_COLUMNS if c in all_keys] + field_columns

    output_path.parent.mkdir(parents=True, exist_ok=True)
    with open(output_path, "w", newline="") as f:
        writer = csv.DictWriter(f, fieldnames=columns, extrasaction="ignore")
        writer.writeheader()
        writer.writerows(rows)


def _print_summary(summary: dict[str, int], output_csv: Path) -> None:
    print(f"\n{'=' * 50}")
    print("Sorting Complete")
    print(f"{'=' * 50}")
    print(f"Total:      {summary['total']}")
    print(f"Successful: {summary['successful']}")
    print(f"Failed:     {summary['failed']}")
    print(f"Output:     {output_csv}")


def _emit(payload: object, output: Path | None) -> None:
    output_str = json.dumps(payload, indent=2, ensure_ascii=False)
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
        description="Identity and education document sorter",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument(
        "-c", "--config", type=Path, default=None, help="Path to config YAML"
    )

    subparsers = parser.add_subparsers(dest="command", help="Available commands")

    classify_parser = subparsers.add_parser(
        "classify", help="Classify OCR transcripts (text files, or - for stdin)"
    )
    classify_parser.add_argument("files", type=Path, nargs="+", help="Transcripts")
    classify_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    scan_parser = subparsers.add_parser("scan", help="OCR and classify one photo")
    scan_parser.add_argument("file", type=Path, help="Document photo to process")
    scan_parser.add_argument("--lang", default=None, help="OCR language code")
    scan_parser.add_argument("-o", "--output", type=Path, help="Output JSON file")

    batch_parser = subparsers.add_parser("batch", help="Sort a folder of photos")
    batch_parser.add_argument(
        "input_dir", type=Path, help="Input directory with document photos"
    )
    batch_parser.add_argument(
        "-o",
        "--output",
        type=Path,
        default=Path("results.csv"),
        help="Output CSV file (default: results.csv)",
    )
    batch_parser.add_argument(
        "-v", "--verbose", action="store_true", help="Verbose output"
    )

    args = parser.parse_args(argv)

    config = load_config(args.config)
    setup_logging(config.log_level)

    if args.command == "classify":
        missing = [p for p in args.files if str(p) != "-" and not p.is_file()]
        if missing:
            print(f"Error: {missing[0]} does not exist", file=sys.stderr)
            sys.exit(1)
        results = classify_files(args.files, DocumentPipeline(config.classification))
        _emit(results[0] if len(results) == 1 else results, args.output)
    elif args.command == "scan":
        if not args.file.exists():
            print(f"Error: {args.file} does not exist", file=sys.stderr)
            sys.exit(1)
        _emit(scan_image(args.file, config, args.lang), args.output)
    elif args.command == "batch":
        if not args.input_dir.is_dir():
            print(f"Error: {args.input_dir} is not a directory", file=sys.stderr)
            sys.exit(1)
        process_folder(args.input_dir, args.output, config, args.verbose)
    else:
        parser.print_help()
        sys.exit(0)


if __name__ == "__main__":
    main()
