"""Static catalogue of development artifacts."""

from __future__ import annotations

from devsweep.models.rule import ArtifactRule, Category, IDERule

_dir = ArtifactRule.exact_dir
_file = ArtifactRule.exact_file

# Order only matters for wildcard rules: the first one that matches wins.
CATALOGUE: tuple[ArtifactRule, ...] = (
    _dir("node_modules", Category.DEPS, "npm/yarn dependencies"),
    _dir(".next", Category.BUILD, "Next.js build cache"),
    _dir(".nuxt", Category.BUILD, "Nuxt build cache"),
    _dir(".turbo", Category.CACHE, "Turborepo cache"),
    _dir("dist", Category.BUILD, "Build output"),
    _dir("build", Category.BUILD, "Build output"),
    _dir(".cache", Category.CACHE, "Generic cache"),
    _dir(".parcel-cache", Category.CACHE, "Parcel cache"),
    _dir(".vite", Category.CACHE, "Vite cache"),
    _dir("coverage", Category.TEST, "Test coverage reports"),
    _dir(".nyc_output", Category.TEST, "nyc coverage data"),
    _file(".eslintcache", Category.CACHE, "ESLint cache"),
    _file(".tsbuildinfo", Category.BUILD, "TypeScript incremental build"),
    _dir("__pycache__", Category.CACHE, "Python bytecode cache"),
    _dir(".pytest_cache", Category.TEST, "Pytest cache"),
    _dir(".mypy_cache", Category.CACHE, "mypy cache"),
    _dir(".ruff_cache", Category.CACHE, "Ruff cache"),
    _dir(".tox", Category.TEST, "tox environments"),
    _dir("venv", Category.DEPS, "Python virtual environment"),
    _dir(".venv", Category.DEPS, "Python virtual environment"),
    _dir("target", Category.BUILD, "Rust/Java build output"),
    _dir(".gradle", Category.CACHE, "Gradle cache"),
    _dir("logs", Category.LOGS, "Log directory"),
    _file("npm-debug.log", Category.LOGS, "npm debug log"),
    _file("yarn-error.log", Category.LOGS, "Yarn error log"),
    ArtifactRule.wildcard_dir("*.egg-info", Category.BUILD, "Python package metadata"),
)

IDE_CACHES: tuple[IDERule, ...] = (
    IDERule(".cursor", "Cursor IDE cache/data"),
    IDERule(".vscode", "VS Code extensions/data"),
    IDERule(".config/Code", "VS Code config/cache"),
    IDERule(".config/Cursor", "Cursor config/cache"),
)

PROFILES: dict[str, frozenset[Category]] = {
    "safe": frozenset({Category.DEPS, Category.CACHE}),
    "aggressive": frozenset(
        {Category.DEPS, Category.CACHE, Category.BUILD, Category.TEST, Category.LOGS}
    ),
}

# Categories selectable by the user; ``ide`` is only produced by the home scan.
SCAN_CATEGORIES: tuple[Category, ...] = tuple(c for c in Category if c is not Category.IDE)
