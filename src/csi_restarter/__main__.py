"""CSI Restarter."""

from __future__ import annotations

import sys

from dotenv import find_dotenv, load_dotenv

from csi_restarter.cli import app


def _main() -> int:
    """Run application."""

    # .env values never override variables already set in the environment
    load_dotenv(find_dotenv(usecwd=True))

    return_code = app.meta()
    if return_code is None:
        return_code = 0
    return return_code  # type: ignore[no-any-return]


if __name__ == "__main__":
    sys.exit(_main())
