"""
Rule constants.

Curated extension sets, default ignore patterns, ecosystem manifest and
lock-file tables, and the marker/signature vocabularies used by the
content heuristics.
"""

# ─────────────────────────────────────────────────────────────
# Default Pattern Excludes
# ─────────────────────────────────────────────────────────────

# Directories that never carry hand-written source worth packing
DEFAULT_IGNORE_DIRS = [
    ".git/",
    ".hg/",
    ".svn/",
    "node_modules/",
    "vendor/",
    ".idea/",
    ".vscode/",
    "__pycache__/",
    ".pytest_cache/",
    ".mypy_cache/",
    ".ruff_cache/",
    ".tox/",
    ".venv/",
    "venv/",
    "dist/",
    "build/",
    "coverage/",
    "bin/",
    ".terraform/",
    ".next/",
    ".gradle/",
    "target/",
]

# Individual noise files (OS metadata, editor droppings, tool state)
DEFAULT_IGNORE_FILES = [
    ".DS_Store",
    "Thumbs.db",
    "desktop.ini",
    "coverage.xml",
    ".dmypy.json",
    "*.swp",
    "*.swo",
    "*~",
    "*.tsbuildinfo",
    "*.egg-info",
]

# ─────────────────────────────────────────────────────────────
# Binary Detection
# ─────────────────────────────────────────────────────────────

BINARY_EXTENSIONS = frozenset(
    {
        # Executables and object code
        ".exe", ".dll", ".so", ".dylib", ".bin", ".obj", ".o", ".a", ".lib",
        ".class", ".jar", ".war", ".pyc", ".pyo", ".pyd", ".wasm", ".elf",
        # Archives
        ".zip", ".tar", ".gz", ".tgz", ".bz2", ".xz", ".7z", ".rar", ".iso",
        ".lz", ".lzma", ".zst", ".cab",
        # Documents
        ".pdf", ".doc", ".docx", ".xls", ".xlsx", ".ppt", ".pptx", ".odt",
        ".ods", ".odp", ".rtf", ".epub",
        # Images
        ".jpg", ".jpeg", ".png", ".gif", ".bmp", ".tiff", ".tif", ".webp",
        ".ico", ".icns", ".svg", ".eps", ".raw", ".cr2", ".nef", ".psd",
        ".heic", ".avif", ".ai",
        # Audio
        ".mp3", ".wav", ".flac", ".aac", ".ogg", ".m4a", ".wma", ".aiff",
        # Video
        ".mp4", ".avi", ".mov", ".mkv", ".webm", ".flv", ".wmv", ".m4v",
        # Databases
        ".db", ".sqlite", ".sqlite3", ".mdb", ".accdb", ".dbf",
        # Fonts
        ".ttf", ".otf", ".woff", ".woff2", ".eot",
        # Installers and packages
        ".dmg", ".pkg", ".msi", ".deb", ".rpm", ".apk", ".ipa", ".appimage",
        # Data blobs and models
        ".dat", ".pickle", ".pkl", ".npy", ".npz", ".parquet", ".onnx", ".pt",
        ".h5",
    }
)

# Files larger than this are binary without inspection (media/archives)
BINARY_SIZE_LIMIT = 10 * 1024 * 1024
BINARY_SAMPLE_SIZE = 512
BINARY_NON_PRINTABLE_RATIO = 0.30

# ─────────────────────────────────────────────────────────────
# Ecosystem Detection
# ─────────────────────────────────────────────────────────────

# Manifest basename (glob-aware) -> ecosystem
MANIFEST_INDICATORS: dict[str, str] = {
    "package.json": "node",
    "composer.json": "php",
    "pyproject.toml": "python",
    "Pipfile": "python",
    "requirements.txt": "python",
    "Gemfile": "ruby",
    "Cargo.toml": "rust",
    "go.mod": "go",
    "*.csproj": "dotnet",
    "*.fsproj": "dotnet",
    "*.vbproj": "dotnet",
    "build.gradle": "java",
    "build.gradle.kts": "java",
    "pom.xml": "java",
}

# Ecosystem -> lock-file basenames/globs it produces
LOCK_FILES_BY_ECOSYSTEM: dict[str, tuple[str, ...]] = {
    "node": (
        "package-lock.json",
        "yarn.lock",
        "pnpm-lock.yaml",
        "bun.lockb",
        ".pnp.cjs",  # Yarn PnP
        ".pnp.loader.mjs",
    ),
    "php": ("composer.lock",),
    "python": ("poetry.lock", "Pipfile.lock", "pdm.lock"),
    "ruby": ("Gemfile.lock",),
    "rust": ("Cargo.lock",),
    "go": ("go.sum",),
    "dotnet": (
        "packages.lock.json",
        "project.assets.json",  # MSBuild generated
        "*.nuget.props",
        "*.nuget.targets",
    ),
    "java": ("gradle.lockfile",),
}

# ─────────────────────────────────────────────────────────────
# Generated-File Detection
# ─────────────────────────────────────────────────────────────

# Lower-case substrings; compared against lower-cased file heads
GENERATED_MARKERS = (
    "do not edit",
    "@generated",
    "code generated by",
    "auto-generated",
    "autogenerated",
    "automatically generated",
    "this file was generated",
    "this file is generated",
    "generated by the protocol buffer compiler",
    "<auto-generated",
)

MARKER_SCAN_BYTES = 32 * 1024
GENERATED_SIZE_THRESHOLD = 1024 * 1024
GENERATED_MIN_LINES = 50
GENERATED_DUPLICATE_RATIO = 0.85
# Stripped lines shorter than this carry no structure ("}", ");")
GENERATED_MIN_LINE_LENGTH = 4

# ─────────────────────────────────────────────────────────────
# Lock-Signature Detection
# ─────────────────────────────────────────────────────────────

LOCK_SIGNATURE_SCAN_BYTES = 8 * 1024

# Any one of these is conclusive
LOCK_STRONG_SIGNATURES = (
    "lockfileVersion",
    "# yarn lockfile",
    "__metadata:",  # Yarn berry
    "@generated by Poetry",
    "automatically @generated by Cargo",
    "This file is @generated by PDM",
    '"_readme": [',  # Composer
    "BUNDLED WITH",
)

# At least two of these must appear. Regexes (multiline) matched against
# lock-file key syntax, so prose mentioning the words does not count
LOCK_WEAK_SIGNATURES = (
    r'"resolved":\s*"',
    r'"integrity":\s*"',
    r'"checksum":\s*"',
    r'^\s*checksum\s*=\s*"',
    r'"content-hash":\s*"',
    r'^\s*content-hash\s*=\s*"',
    r"^\[\[package\]\]\s*$",
    r"^\s+specs:\s*$",
    r"^\s*dependencies:\s*$",
    r'"version":\s*"',
    r"\bsha512-[A-Za-z0-9+/]{20,}",
    r'"hash":\s*"',
)
