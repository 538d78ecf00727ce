"""Module entry point for `python -m excel_asset_importer`."""

from .cli import main

if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
