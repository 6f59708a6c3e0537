"""Run connectivity checks against the brochure image provider."""

from __future__ import annotations

import asyncio
import sys
from typing import Iterable

from brochure.integrations import IntegrationCheckResult, run_all_checks


def _format_result(result: IntegrationCheckResult) -> str:
    status = "✅" if result.success else "❌"
    return f"{status} {result.name}: {result.message}"


def print_results(results: Iterable[IntegrationCheckResult]) -> bool:
    all_ok = True
    for result in results:
        print(_format_result(result))
        all_ok = all_ok and result.success
    return all_ok


def main() -> int:
    results = asyncio.run(run_all_checks())
    return 0 if print_results(results) else 1


if __name__ == "__main__":
    sys.exit(main())
