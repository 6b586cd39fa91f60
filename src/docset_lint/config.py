"""
Configuration for docset-lint.

Manages which files are scanned, what the slash-command convention looks
like, which fence languages are recognized and how severe each rule is.
Settings come from defaults or from a ``.docset-lint.yaml`` file at the
project root.
"""

from dataclasses import dataclass, field, fields
from fnmatch import fnmatch
from pathlib import Path, PurePosixPath
from typing import Any

import yaml

from docset_lint.errors import ConfigError

CONFIG_FILENAMES = (".docset-lint.yaml", ".docset-lint.yml")

SEVERITY_VALUES = ("error", "warning", "info", "off")

DEFAULT_LANGUAGES = [
    # .NET
    "csharp", "cs", "c#", "vb", "vbnet", "fsharp", "xaml", "xml", "razor",
    "cshtml", "msbuild", "sln",
    # shells
    "bash", "sh", "shell", "zsh", "console", "powershell", "ps1", "pwsh",
    "cmd", "bat", "batch",
    # data / config
    "json", "jsonc", "yaml", "yml", "toml", "ini", "sql", "csv",
    # markup / web
    "markdown", "md", "html", "css", "javascript", "js", "typescript", "ts",
    "http", "graphql",
    # misc
    "text", "txt", "plaintext", "diff", "mermaid", "dockerfile", "python",
    "py", "regex", "gitignore",
]


@dataclass
class LintConfig:
    """Configuration for the documentation-set validator.

    Attributes:
        project_root: Root directory of the documentation repository
        commands_dir: Directory (relative to root) holding slash-command files
        markdown_globs: Globs selecting Markdown documents
        template_globs: Globs selecting code template files
        skip_patterns: fnmatch patterns tested against each path component
        required_front_matter: Keys every command file must define
        known_languages: Recognized code fence languages
        allow_untagged_fences: Accept fences without a language tag
        check_anchors: Verify ``#fragment`` parts of links
        title_exempt: Globs exempt from the leading ``# Title`` rule
        severity_overrides: rule id -> error/warning/info/off
        external_schemes: URL schemes that are never resolved locally
    """

    project_root: Path = field(default_factory=lambda: Path("."))
    commands_dir: str = ".claude/commands"

    markdown_globs: list[str] = field(default_factory=lambda: ["**/*.md"])
    template_globs: list[str] = field(default_factory=lambda: ["templates/*.cs"])
    skip_patterns: list[str] = field(default_factory=lambda: [
        ".git", "node_modules", "bin", "obj", ".venv", "venv",
        "__pycache__", "site", "dist", "build",
    ])

    required_front_matter: list[str] = field(default_factory=lambda: ["description"])
    known_languages: list[str] = field(default_factory=lambda: list(DEFAULT_LANGUAGES))
    allow_untagged_fences: bool = False
    check_anchors: bool = True
    title_exempt: list[str] = field(default_factory=lambda: [".claude/commands/**"])

    severity_overrides: dict[str, str] = field(default_factory=dict)
    external_schemes: list[str] = field(default_factory=lambda: [
        "http", "https", "mailto", "ftp", "tel", "data",
    ])

    def __post_init__(self):
        """Normalize paths and validate field values."""
        self.project_root = Path(self.project_root).resolve()

        for name in (
            "markdown_globs", "template_globs", "skip_patterns",
            "required_front_matter", "known_languages", "title_exempt",
            "external_schemes",
        ):
            value = getattr(self, name)
            if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
                raise ConfigError(f"'{name}' must be a list of strings")

        for name in ("allow_untagged_fences", "check_anchors"):
            if not isinstance(getattr(self, name), bool):
                raise ConfigError(f"'{name}' must be true or false")

        if not isinstance(self.commands_dir, str):
            raise ConfigError("'commands_dir' must be a string")
        self.commands_dir = self.commands_dir.strip("/")

        if not isinstance(self.severity_overrides, dict):
            raise ConfigError("'severity_overrides' must be a mapping of rule id to severity")
        normalized = {}
        for rule, severity in self.severity_overrides.items():
            if severity is False:
                # YAML 1.1 reads an unquoted `off` as false
                severity = "off"
            value = str(severity).lower()
            if value not in SEVERITY_VALUES:
                raise ConfigError(
                    f"Invalid severity {severity!r} for rule {rule!r}; "
                    f"expected one of {', '.join(SEVERITY_VALUES)}"
                )
            normalized[str(rule)] = value
        self.severity_overrides = normalized

        self._languages = {lang.lower() for lang in self.known_languages}

    @classmethod
    def from_yaml(cls, yaml_path: Path, project_root: Path | None = None) -> "LintConfig":
        """Load configuration from YAML file.

        Args:
            yaml_path: Path to YAML configuration file
            project_root: Overrides any ``project_root`` in the file

        Returns:
            LintConfig instance

        Raises:
            ConfigError: If the file cannot be read or is not a valid mapping
        """
        try:
            with open(yaml_path, encoding="utf-8") as f:
                data = yaml.safe_load(f)
        except OSError as e:
            raise ConfigError(f"Cannot read config file: {e}", path=str(yaml_path), cause=e) from e
        except yaml.YAMLError as e:
            line = None
            mark = getattr(e, "problem_mark", None)
            if mark is not None:
                line = mark.line + 1
            raise ConfigError(
                "Config file is not valid YAML", path=str(yaml_path), line=line, cause=e
            ) from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise ConfigError("Config file must contain a mapping", path=str(yaml_path))

        if project_root is not None:
            data["project_root"] = project_root

        return cls.from_dict(data)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "LintConfig":
        """Create config from dictionary.

        Raises:
            ConfigError: On unknown keys
        """
        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ConfigError(f"Unknown configuration keys: {', '.join(unknown)}")
        return cls(**data)

    @classmethod
    def discover(cls, project_root: Path) -> "LintConfig":
        """Load ``.docset-lint.yaml`` from the project root, or use defaults."""
        project_root = Path(project_root)
        for name in CONFIG_FILENAMES:
            candidate = project_root / name
            if candidate.is_file():
                return cls.from_yaml(candidate, project_root=project_root)
        return cls(project_root=project_root)

    def to_dict(self) -> dict[str, Any]:
        """Convert config to dictionary."""
        return {
            "project_root": str(self.project_root),
            "commands_dir": self.commands_dir,
            "markdown_globs": list(self.markdown_globs),
            "template_globs": list(self.template_globs),
            "skip_patterns": list(self.skip_patterns),
            "required_front_matter": list(self.required_front_matter),
            "known_languages": list(self.known_languages),
            "allow_untagged_fences": self.allow_untagged_fences,
            "check_anchors": self.check_anchors,
            "title_exempt": list(self.title_exempt),
            "severity_overrides": dict(self.severity_overrides),
            "external_schemes": list(self.external_schemes),
        }

    def to_yaml(self) -> str:
        """Render the configuration as YAML."""
        return yaml.safe_dump(self.to_dict(), sort_keys=False)

    def relative(self, file_path: Path) -> PurePosixPath:
        """Path relative to the project root (posix form)."""
        try:
            rel = Path(file_path).relative_to(self.project_root)
        except ValueError:
            rel = Path(file_path)
        return PurePosixPath(rel.as_posix())

    def should_skip(self, file_path: Path) -> bool:
        """Check if a file should be skipped during scanning.

        Every component of the path relative to the project root is tested
        against ``skip_patterns``.
        """
        parts = self.relative(file_path).parts
        return any(
            fnmatch(part, pattern)
            for part in parts
            for pattern in self.skip_patterns
        )

    def is_command(self, rel_path: PurePosixPath | str) -> bool:
        """True for Markdown files inside ``commands_dir``."""
        rel = PurePosixPath(rel_path)
        if rel.suffix.lower() not in (".md", ".markdown"):
            return False
        commands = PurePosixPath(self.commands_dir)
        return rel.parts[: len(commands.parts)] == commands.parts

    def is_title_exempt(self, rel_path: PurePosixPath | str) -> bool:
        """True when the path matches a ``title_exempt`` glob."""
        rel = str(PurePosixPath(rel_path))
        return any(fnmatch(rel, pattern) for pattern in self.title_exempt)

    def is_known_language(self, language: str) -> bool:
        return language.lower() in self._languages

    def severity_for(self, rule_id: str, default: str) -> str | None:
        """Effective severity for a rule; None means the rule is off."""
        severity = self.severity_overrides.get(rule_id, default)
        return None if severity == "off" else severity


# Default configuration
DEFAULT_CONFIG = LintConfig()
