#!/usr/bin/env python3
"""
Проверка качества github-client-core: black, ruff, mypy, pytest.

Usage:
    python scripts/check.py
    python scripts/check.py --fast          # Без mypy
    python scripts/check.py --fix           # black и ruff исправляют сами
    python scripts/check.py --integration   # Включая интеграционные тесты
"""

import argparse
import subprocess
import sys
from pathlib import Path
from typing import List, Tuple

ROOT = Path(__file__).resolve().parent.parent
SRC = ROOT / "src"
TESTS = ROOT / "tests"

GREEN = '\033[92m'
RED = '\033[91m'
YELLOW = '\033[93m'
BOLD = '\033[1m'
END = '\033[0m'


def run(name: str, command: List[str]) -> bool:
    """Запускает инструмент, отсутствующий инструмент не считается ошибкой."""
    print(f"\n{BOLD}▶ {name}{END}")
    try:
        result = subprocess.run(command, cwd=ROOT, capture_output=True, text=True, errors='ignore')
    except FileNotFoundError:
        print(f"{YELLOW}⚠ {command[0]} not installed - SKIPPED{END}")
        return True

    if result.returncode == 0:
        print(f"{GREEN}✓ {name}{END}")
        return True

    print(f"{RED}✗ {name}{END}")
    print((result.stdout + result.stderr)[-2000:])
    return False


def build_steps(args: argparse.Namespace) -> List[Tuple[str, List[str]]]:
    paths = [str(SRC), str(TESTS)]
    steps = [
        ("black", ["black", *paths] if args.fix else ["black", "--check", *paths]),
        ("ruff", ["ruff", "check", *paths, *(["--fix"] if args.fix else [])]),
    ]
    if not args.fast:
        steps.append(("mypy", ["mypy", str(SRC / "github_client")]))

    pytest_command = [sys.executable, "-m", "pytest", "-q"]
    if not args.integration:
        pytest_command += ["-m", "not integration"]
    steps.append(("pytest", pytest_command))
    return steps


def main() -> int:
    parser = argparse.ArgumentParser(description="Проверка качества кода")
    parser.add_argument("--fast", action="store_true", help="Без mypy")
    parser.add_argument("--fix", action="store_true", help="Автоматические исправления")
    parser.add_argument("--integration", action="store_true", help="Запустить интеграционные тесты")
    args = parser.parse_args()

    print(f"{BOLD}GitHub Client Core - проверка качества{END} ({ROOT})")

    results = [(name, run(name, command)) for name, command in build_steps(args)]

    print(f"\n{BOLD}Итог:{END}")
    for name, success in results:
        print(f"  {GREEN + 'PASSED' if success else RED + 'FAILED'}{END}  {name}")

    return 0 if all(success for _, success in results) else 1


if __name__ == "__main__":
    sys.exit(main())
