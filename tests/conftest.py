"""Shared test fixtures for kangapp tests."""
from pathlib import Path

import pytest

from kangapp.core.config import KangConfig, set_config
from kangapp.core.template_loader import TemplateLoader
from kangapp.services.process import ProcessFailure

LAYOUT_TSX = """import type { Metadata } from 'next';

export const metadata: Metadata = {
  title: '%NAME%',
  description: '%DESCRIPTION%',
};
"""

CATALOG_YML = """templates:
  next-ts:
    label: Next.js + TypeScript
    description: Next.js test template
    kind: runnable
  vite-ts:
    label: React + TypeScript + Vite
    kind: runnable
    lint_config_renames:
      .eslintrc.js: .eslintrc.cjs
  node-ts:
    label: Node.js + TypeScript
    kind: library
"""


class RecordingGateway:
    """Process gateway double that records calls instead of spawning.

    Commands whose name (or binary basename) is in ``failing`` raise
    ProcessFailure with exit status 1.
    """

    def __init__(self, failing=()):
        self.failing = set(failing)
        self.calls = []

    def spawn(self, command, args, cwd):
        command = str(command)
        args = list(args)
        self.calls.append((command, args, Path(cwd)))
        if command in self.failing or Path(command).name in self.failing:
            raise ProcessFailure(command, args, returncode=1, stderr="boom")
        return True


def _write(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


@pytest.fixture(autouse=True)
def reset_config():
    """Start every test from default configuration."""
    set_config(KangConfig())
    yield
    set_config(None)


@pytest.fixture
def templates_dir(tmp_path):
    """Templates root with a catalog, three projects and lint configs."""
    root = tmp_path / "templates"
    _write(root / "catalog.yml", CATALOG_YML)

    next_ts = root / "projects" / "next-ts"
    _write(next_ts / "src" / "app" / "_layout.tsx", LAYOUT_TSX)
    _write(next_ts / "src" / "app" / "page.tsx", "export default function Home() {}\n")
    _write(next_ts / "_package.json", '{"name": "%NAME%", "description": "%DESCRIPTION%"}\n')
    _write(next_ts / "tsconfig.json", '{"compilerOptions": {"width": "100%"}}\n')
    _write(next_ts / ".gitignore", "node_modules/\n")

    vite_ts = root / "projects" / "vite-ts"
    _write(vite_ts / "_index.html", "<title>%NAME%</title>\n")
    _write(vite_ts / "src" / "main.tsx", "console.log('hi');\n")

    node_ts = root / "projects" / "node-ts"
    _write(node_ts / "src" / "index.ts", "export {};\n")

    _write(root / "configs" / ".eslintrc.js", "module.exports = {};\n")
    _write(root / "configs" / ".prettierrc", "{}\n")
    return root


@pytest.fixture
def template_loader(templates_dir):
    """TemplateLoader over the test templates."""
    return TemplateLoader(templates_dir)


@pytest.fixture
def variables():
    """Variable set for a project named my-app."""
    return {"name": "my-app", "description": "my-app 프로젝트입니다."}


@pytest.fixture
def gateway():
    """Gateway where every command succeeds."""
    return RecordingGateway()
