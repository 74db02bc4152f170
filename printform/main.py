import argparse
import json
import sys
from collections.abc import Sequence
from pathlib import Path

from printform.api.service import FormService, build_service
from printform.config.settings import Settings
from printform.database.connection import close_pool, init_pool
from printform.logging.logger import Log
from printform.processor.file_loader import FileLoader


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="printform",
        description="Extract printing request forms from photographed images.",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    extract = subparsers.add_parser("extract", help="Extract fields from image files")
    extract.add_argument("files", nargs="+", type=Path, help="Image files to process")
    extract.add_argument(
        "--commit",
        action="store_true",
        help="Save every successful extraction without manual edits",
    )

    forms = subparsers.add_parser("forms", help="List saved printing forms")
    forms.add_argument("--csv", action="store_true", help="Print forms as CSV")
    return parser


def run_extract(service: FormService, paths: Sequence[Path], commit: bool) -> int:
    loader = FileLoader()
    files = [loader.load(path) for path in paths]
    staging = service.open_staging()
    batch = service.upload(files, staging)
    payload: dict[str, object] = batch.to_dict()
    if commit:
        payload["commit"] = service.save_staged(staging).to_dict()
    print(json.dumps(payload, indent=2, ensure_ascii=False))
    failed = any(outcome.status == "failed" for outcome in batch.outcomes)
    return 1 if failed else 0


def run_forms(service: FormService, as_csv: bool) -> int:
    if as_csv:
        sys.stdout.write(service.export_printing_forms_csv())
        return 0
    forms = [
        {"id": form.id, "imageId": form.image_id, "filename": form.filename, **form.fields.to_dict()}
        for form in service.list_printing_forms()
    ]
    print(json.dumps({"success": True, "forms": forms}, indent=2, ensure_ascii=False))
    return 0


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point: parse args -> configure -> initialize pool -> run command."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    init_pool(settings)

    try:
        service = build_service(settings)
        if args.command == "extract":
            return run_extract(service, args.files, args.commit)
        return run_forms(service, args.csv)
    finally:
        close_pool()


if __name__ == "__main__":
    sys.exit(main())
