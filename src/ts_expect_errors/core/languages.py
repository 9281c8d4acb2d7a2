from pathlib import Path

_KIND_ALIASES = {
    "javascript": "typescript",
    "js": "typescript",
    "jsx": "tsx",
    "ts": "typescript",
    "tsx": "tsx",
    "typescript": "typescript",
    "vue": "vue",
}

_EXTENSION_KIND_MAP = {
    ".cjs": "typescript",
    ".cts": "typescript",
    ".js": "typescript",
    ".jsx": "tsx",
    ".mjs": "typescript",
    ".mts": "typescript",
    ".ts": "typescript",
    ".tsx": "tsx",
    ".vue": "vue",
}

_DECLARATION_SUFFIXES = (".d.ts", ".d.mts", ".d.cts")

_SUPPORTED_KINDS = set(_EXTENSION_KIND_MAP.values())

# Extensions the remove command scans.
SCANNED_EXTENSIONS = frozenset({".ts", ".tsx", ".vue"})


def normalize_kind(kind: str) -> str:
    normalized = kind.strip().lower()
    resolved = _KIND_ALIASES.get(normalized, normalized)
    if resolved not in _SUPPORTED_KINDS:
        raise ValueError(f"Unsupported document kind '{kind}'. Supported: {sorted(_SUPPORTED_KINDS)}")
    return resolved


def detect_document_kind(file_path: Path) -> str:
    name = file_path.name.lower()
    if name.endswith(_DECLARATION_SUFFIXES):
        raise ValueError(f"Declaration files are not annotated: {file_path}")
    suffix = file_path.suffix.lower()
    if suffix in _EXTENSION_KIND_MAP:
        return _EXTENSION_KIND_MAP[suffix]
    raise ValueError(f"Unsupported file extension: {suffix}")


def is_supported_file(file_path: Path) -> bool:
    try:
        detect_document_kind(file_path)
    except ValueError:
        return False
    return True
