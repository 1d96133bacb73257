from pathlib import Path

from .manifest import ProjectManifest

SOURCE_SUFFIX = ".al"


def discover_source_files(root: Path, manifest: ProjectManifest) -> list[Path]:
    files: list[Path] = []
    for rel in manifest.source_paths:
        base = (root / rel).resolve()
        if not base.exists():
            continue
        if base.is_file():
            if base.suffix.lower() == SOURCE_SUFFIX:
                files.append(base)
            continue
        for p in base.rglob("*"):
            if p.is_file() and p.suffix.lower() == SOURCE_SUFFIX:
                files.append(p)
    return sorted(set(files))


def discover_symbol_packages(root: Path, manifest: ProjectManifest) -> list[Path]:
    """Find compiled symbol packages (.app) and extracted SymbolReference.json files."""
    files: list[Path] = []
    for rel in manifest.symbol_paths:
        base = (root / rel).resolve()
        if not base.exists():
            continue
        candidates = [base] if base.is_file() else base.rglob("*")
        for p in candidates:
            if not p.is_file():
                continue
            suffix = p.suffix.lower()
            if suffix == ".app" or (suffix == ".json" and p.stem == "SymbolReference"):
                files.append(p)
    return sorted(set(files))
