#!/usr/bin/env python3
"""Import every project module to ensure wiring is valid."""

from __future__ import annotations

import compileall
import importlib
import os
import sys
import traceback
from pathlib import Path

# Provide dummy environment variables so config imports don't fail.
os.environ.setdefault("BOT_TOKEN", "dummy")

REPO_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(REPO_ROOT))

# Compile all modules to bytecode to catch syntax errors.
if not compileall.compile_dir(REPO_ROOT / "studybot", quiet=1):
    sys.exit(1)

modules: list[str] = []
for path in (REPO_ROOT / "studybot").rglob("*.py"):
    if path.name == "__init__.py":
        continue
    modules.append(".".join(path.relative_to(REPO_ROOT).with_suffix("").parts))

failed = False
for name in sorted(modules):
    try:
        importlib.import_module(name)
        print(f"PASS {name}")
    except Exception:
        failed = True
        print(f"FAIL {name}")
        traceback.print_exc()

if failed:
    sys.exit(1)
print("All imports passed")
