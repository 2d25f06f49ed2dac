"""Check that the vision provider and the optional looks store are reachable."""

from __future__ import annotations

import asyncio
import sys
from typing import Sequence

from stylegenie.integrations import IntegrationCheckResult, run_all_checks
from stylegenie.monitoring.logging import configure_logging


def render(results: Sequence[IntegrationCheckResult]) -> str:
    lines = []
    for result in results:
        marker = "OK  " if result.success else "FAIL"
        lines.append(f"[{marker}] {result.name}: {result.message}")
    return "\n".join(lines)


def main() -> int:
    configure_logging()
    results = asyncio.run(run_all_checks())
    print(render(results))
    return 0 if all(result.success for result in results) else 1


if __name__ == "__main__":
    sys.exit(main())
