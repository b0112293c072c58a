"""Bar configuration: data model, YAML loading and change watching."""

from __future__ import annotations

import logging
import os
import string
import time
from collections.abc import Callable, Iterator, Mapping
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import Any, Optional, TypeVar, Union

import yaml

log = logging.getLogger(__name__)

CONFIG_FILE_NAME = "barshell.yml"

_U32_MAX = 2**32 - 1
_I32_MIN = -(2**31)
_I32_MAX = 2**31 - 1


class ConfigError(ValueError):
    """Raised when a configuration document cannot be understood."""


@dataclass(frozen=True)
class Color:
    """An RGBA colour with channels in the range 0.0 to 1.0."""

    r: float
    g: float
    b: float
    a: float = 1.0

    @classmethod
    def from_rgb8(cls, r: int, g: int, b: int) -> Color:
        """Build an opaque colour from 8-bit channels."""
        for channel in (r, g, b):
            if isinstance(channel, bool) or not isinstance(channel, int) or not 0 <= channel <= 255:
                raise ValueError(f"colour channel out of range: {channel!r}")
        return cls(r / 255, g / 255, b / 255, 1.0)

    @classmethod
    def from_hex(cls, value: str) -> Color:
        """Parse ``#RGB``, ``#RGBA``, ``#RRGGBB`` or ``#RRGGBBAA``; alpha is dropped."""
        if not isinstance(value, str) or not value.startswith("#"):
            raise ConfigError(f"invalid hex colour: {value!r}")
        digits = value[1:]
        if len(digits) not in (3, 4, 6, 8) or not all(c in string.hexdigits for c in digits):
            raise ConfigError(f"invalid hex colour: {value!r}")
        if len(digits) in (3, 4):
            digits = "".join(c * 2 for c in digits)
        r, g, b = (int(digits[i : i + 2], 16) for i in (0, 2, 4))
        return cls.from_rgb8(r, g, b)


@dataclass(frozen=True)
class Pair:
    """A background colour together with the text colour drawn on it."""

    color: Color
    text: Color


@dataclass(frozen=True)
class AppearanceColor:
    """A theme colour: a base plus optional strong, weak and text variants."""

    base: Color
    strong: Optional[Color] = None
    weak: Optional[Color] = None
    text: Optional[Color] = None

    @classmethod
    def parse(cls, value: Any) -> AppearanceColor:
        """Accept either a hex string or a mapping with a required ``base``."""
        if isinstance(value, str):
            return cls(Color.from_hex(value))
        if isinstance(value, Mapping):
            if "base" not in value:
                raise ConfigError("appearance colour: missing field `base`")
            variants = {}
            for key in ("strong", "weak", "text"):
                raw = value.get(key)
                variants[key] = None if raw is None else Color.from_hex(raw)
            return cls(Color.from_hex(value["base"]), **variants)
        raise ConfigError(f"invalid appearance colour: {value!r}")

    def get_base(self) -> Color:
        return self.base

    def get_text(self) -> Optional[Color]:
        return self.text

    def get_weak_pair(self, text_fallback: Color) -> Optional[Pair]:
        if self.weak is None:
            return None
        return Pair(self.weak, self.text if self.text is not None else text_fallback)

    def get_strong_pair(self, text_fallback: Color) -> Optional[Pair]:
        if self.strong is None:
            return None
        return Pair(self.strong, self.text if self.text is not None else text_fallback)


class WorkspaceVisibilityMode(Enum):
    ALL = "All"
    MONITOR_SPECIFIC = "MonitorSpecific"


class Position(Enum):
    TOP = "Top"
    BOTTOM = "Bottom"


class ModuleName(Enum):
    APP_LAUNCHER = "AppLauncher"
    UPDATES = "Updates"
    CLIPBOARD = "Clipboard"
    WORKSPACES = "Workspaces"
    WINDOW_TITLE = "WindowTitle"
    SYSTEM_INFO = "SystemInfo"
    KEYBOARD_LAYOUT = "KeyboardLayout"
    KEYBOARD_SUBMAP = "KeyboardSubmap"
    TRAY = "Tray"
    CLOCK = "Clock"
    PRIVACY = "Privacy"
    SETTINGS = "Settings"
    MEDIA_PLAYER = "MediaPlayer"


ModuleDef = Union[ModuleName, tuple[ModuleName, ...]]


@dataclass
class UpdatesModuleConfig:
    check_cmd: str
    update_cmd: str


@dataclass
class WorkspacesModuleConfig:
    visibility_mode: WorkspaceVisibilityMode = WorkspaceVisibilityMode.ALL
    enable_workspace_filling: bool = False


@dataclass
class SystemModuleConfig:
    cpu_warn_threshold: int = 60
    cpu_alert_threshold: int = 80
    mem_warn_threshold: int = 70
    mem_alert_threshold: int = 85
    temp_warn_threshold: int = 60
    temp_alert_threshold: int = 80


@dataclass
class ClockModuleConfig:
    format: str = "%a %d %b %R"


@dataclass
class SettingsModuleConfig:
    lock_cmd: Optional[str] = None
    audio_sinks_more_cmd: Optional[str] = None
    audio_sources_more_cmd: Optional[str] = None
    wifi_more_cmd: Optional[str] = None
    vpn_more_cmd: Optional[str] = None
    bluetooth_more_cmd: Optional[str] = None


@dataclass
class MediaPlayerModuleConfig:
    max_title_length: int = 100


_PRIMARY = Color.from_rgb8(250, 179, 135)


def _default_background_color() -> AppearanceColor:
    return AppearanceColor(
        base=Color.from_rgb8(30, 30, 46),
        strong=Color.from_rgb8(69, 71, 90),
        weak=Color.from_rgb8(49, 50, 68),
    )


def _default_primary_color() -> AppearanceColor:
    return AppearanceColor(base=_PRIMARY, text=Color.from_rgb8(30, 30, 46))


def _default_secondary_color() -> AppearanceColor:
    return AppearanceColor(base=Color.from_rgb8(17, 17, 27), strong=Color.from_rgb8(24, 24, 37))


def _default_success_color() -> AppearanceColor:
    return AppearanceColor(Color.from_rgb8(166, 227, 161))


def _default_danger_color() -> AppearanceColor:
    return AppearanceColor(base=Color.from_rgb8(243, 139, 168), weak=Color.from_rgb8(249, 226, 175))


def _default_text_color() -> AppearanceColor:
    return AppearanceColor(Color.from_rgb8(205, 214, 244))


def _default_workspace_colors() -> list[AppearanceColor]:
    return [
        AppearanceColor(_PRIMARY),
        AppearanceColor(Color.from_rgb8(180, 190, 254)),
        AppearanceColor(Color.from_rgb8(203, 166, 247)),
    ]


@dataclass
class Appearance:
    background_color: AppearanceColor = field(default_factory=_default_background_color)
    primary_color: AppearanceColor = field(default_factory=_default_primary_color)
    secondary_color: AppearanceColor = field(default_factory=_default_secondary_color)
    success_color: AppearanceColor = field(default_factory=_default_success_color)
    danger_color: AppearanceColor = field(default_factory=_default_danger_color)
    text_color: AppearanceColor = field(default_factory=_default_text_color)
    workspace_colors: list[AppearanceColor] = field(default_factory=_default_workspace_colors)
    special_workspace_colors: Optional[list[AppearanceColor]] = None


def _default_left() -> list[ModuleDef]:
    return [ModuleName.WORKSPACES]


def _default_center() -> list[ModuleDef]:
    return [ModuleName.WINDOW_TITLE]


def _default_right() -> list[ModuleDef]:
    return [(ModuleName.CLOCK, ModuleName.PRIVACY, ModuleName.SETTINGS)]


@dataclass
class Modules:
    """Modules shown in each section of the bar; a tuple is a group."""

    left: list[ModuleDef] = field(default_factory=_default_left)
    center: list[ModuleDef] = field(default_factory=_default_center)
    right: list[ModuleDef] = field(default_factory=_default_right)


@dataclass(frozen=True)
class Outputs:
    """Which outputs the bar appears on: ``All``, ``Active`` or named ``Targets``."""

    mode: str = "All"
    targets: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if self.mode not in ("All", "Active", "Targets"):
            raise ConfigError(f"unknown outputs mode: {self.mode!r}")
        if self.mode == "Targets" and not self.targets:
            raise ConfigError("outputs: need non-empty")
        if self.mode != "Targets" and self.targets:
            raise ConfigError(f"outputs mode {self.mode!r} takes no targets")


@dataclass
class Config:
    log_level: str = "warn"
    position: Position = Position.TOP
    outputs: Outputs = field(default_factory=Outputs)
    modules: Modules = field(default_factory=Modules)
    app_launcher_cmd: Optional[str] = None
    clipboard_cmd: Optional[str] = None
    truncate_title_after_length: int = 150
    updates: Optional[UpdatesModuleConfig] = None
    workspaces: WorkspacesModuleConfig = field(default_factory=WorkspacesModuleConfig)
    system: SystemModuleConfig = field(default_factory=SystemModuleConfig)
    clock: ClockModuleConfig = field(default_factory=ClockModuleConfig)
    settings: SettingsModuleConfig = field(default_factory=SettingsModuleConfig)
    appearance: Appearance = field(default_factory=Appearance)
    media_player: MediaPlayerModuleConfig = field(default_factory=MediaPlayerModuleConfig)

    @classmethod
    def from_dict(cls, data: Any) -> Config:
        """Build a configuration from a decoded document with camelCase keys."""
        return _build(cls, data, "config", _CONFIG_FIELDS)


# --- value parsers -------------------------------------------------------

_T = TypeVar("_T")
_E = TypeVar("_E", bound=Enum)
_Parser = Callable[[Any, str], Any]


def _mapping(value: Any, what: str) -> Mapping:
    if not isinstance(value, Mapping):
        raise ConfigError(f"{what}: expected a mapping, got {value!r}")
    return value


def _string(value: Any, key: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{key}: expected a string, got {value!r}")
    return value


def _boolean(value: Any, key: str) -> bool:
    if not isinstance(value, bool):
        raise ConfigError(f"{key}: expected a boolean, got {value!r}")
    return value


def _ranged_int(low: int, high: int) -> _Parser:
    def parse(value: Any, key: str) -> int:
        if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
            raise ConfigError(f"{key}: expected an integer in [{low}, {high}], got {value!r}")
        return value

    return parse


_u32 = _ranged_int(0, _U32_MAX)
_i32 = _ranged_int(_I32_MIN, _I32_MAX)


def _enum(enum_cls: type[_E]) -> Callable[[Any, str], _E]:
    def parse(value: Any, key: str) -> _E:
        try:
            return enum_cls(value)
        except ValueError:
            raise ConfigError(f"{key}: unknown variant {value!r}") from None

    return parse


def _optional(parser: _Parser) -> _Parser:
    def parse(value: Any, key: str) -> Any:
        return None if value is None else parser(value, key)

    return parse


def _color(value: Any, key: str) -> AppearanceColor:
    try:
        return AppearanceColor.parse(value)
    except ConfigError as error:
        raise ConfigError(f"{key}: {error}") from None


def _color_list(value: Any, key: str) -> list[AppearanceColor]:
    if not isinstance(value, list):
        raise ConfigError(f"{key}: expected a sequence, got {value!r}")
    return [_color(item, key) for item in value]


def _module_name(value: Any, key: str) -> ModuleName:
    return _enum(ModuleName)(value, key)


def _module_defs(value: Any, key: str) -> list[ModuleDef]:
    if not isinstance(value, list):
        raise ConfigError(f"{key}: expected a sequence, got {value!r}")
    defs: list[ModuleDef] = []
    for item in value:
        if isinstance(item, list):
            defs.append(tuple(_module_name(name, key) for name in item))
        else:
            defs.append(_module_name(item, key))
    return defs


def _outputs(value: Any, key: str) -> Outputs:
    if value in ("All", "Active"):
        return Outputs(value)
    if isinstance(value, Mapping) and len(value) == 1 and "Targets" in value:
        targets = value["Targets"]
        if not isinstance(targets, list):
            raise ConfigError(f"{key}: Targets expects a sequence")
        return Outputs("Targets", tuple(_string(name, key) for name in targets))
    raise ConfigError(f"{key}: unknown variant {value!r}")


def _build(cls: type[_T], data: Any, section: str, fields: Mapping[str, tuple[str, _Parser]],
           required: tuple[str, ...] = ()) -> _T:
    data = _mapping(data, section)
    for key in required:
        if key not in data:
            raise ConfigError(f"{section}: missing field `{key}`")
    kwargs = {
        attr: parse(data[key], key) for key, (attr, parse) in fields.items() if key in data
    }
    return cls(**kwargs)


def _section(cls: type[_T], fields: Mapping[str, tuple[str, _Parser]],
             required: tuple[str, ...] = ()) -> _Parser:
    return lambda value, key: _build(cls, value, key, fields, required)


_UPDATES_FIELDS = {
    "checkCmd": ("check_cmd", _string),
    "updateCmd": ("update_cmd", _string),
}

_WORKSPACES_FIELDS = {
    "visibilityMode": ("visibility_mode", _enum(WorkspaceVisibilityMode)),
    "enableWorkspaceFilling": ("enable_workspace_filling", _boolean),
}

_SYSTEM_FIELDS = {
    "cpuWarnThreshold": ("cpu_warn_threshold", _u32),
    "cpuAlertThreshold": ("cpu_alert_threshold", _u32),
    "memWarnThreshold": ("mem_warn_threshold", _u32),
    "memAlertThreshold": ("mem_alert_threshold", _u32),
    "tempWarnThreshold": ("temp_warn_threshold", _i32),
    "tempAlertThreshold": ("temp_alert_threshold", _i32),
}

_CLOCK_FIELDS = {"format": ("format", _string)}

_SETTINGS_FIELDS = {
    "lockCmd": ("lock_cmd", _optional(_string)),
    "audioSinksMoreCmd": ("audio_sinks_more_cmd", _optional(_string)),
    "audioSourcesMoreCmd": ("audio_sources_more_cmd", _optional(_string)),
    "wifiMoreCmd": ("wifi_more_cmd", _optional(_string)),
    "vpnMoreCmd": ("vpn_more_cmd", _optional(_string)),
    "bluetoothMoreCmd": ("bluetooth_more_cmd", _optional(_string)),
}

_MEDIA_PLAYER_FIELDS = {"maxTitleLength": ("max_title_length", _u32)}

_APPEARANCE_FIELDS = {
    "backgroundColor": ("background_color", _color),
    "primaryColor": ("primary_color", _color),
    "secondaryColor": ("secondary_color", _color),
    "successColor": ("success_color", _color),
    "dangerColor": ("danger_color", _color),
    "textColor": ("text_color", _color),
    "workspaceColors": ("workspace_colors", _color_list),
    "specialWorkspaceColors": ("special_workspace_colors", _optional(_color_list)),
}


def _modules(value: Any, key: str) -> Modules:
    data = _mapping(value, key)
    return Modules(
        left=_module_defs(data["left"], "left") if "left" in data else [],
        center=_module_defs(data["center"], "center") if "center" in data else [],
        right=_module_defs(data["right"], "right") if "right" in data else [],
    )


_CONFIG_FIELDS: dict[str, tuple[str, _Parser]] = {
    "logLevel": ("log_level", _string),
    "position": ("position", _enum(Position)),
    "outputs": ("outputs", _outputs),
    "modules": ("modules", _modules),
    "appLauncherCmd": ("app_launcher_cmd", _optional(_string)),
    "clipboardCmd": ("clipboard_cmd", _optional(_string)),
    "truncateTitleAfterLength": ("truncate_title_after_length", _u32),
    "updates": (
        "updates",
        _optional(_section(UpdatesModuleConfig, _UPDATES_FIELDS, ("checkCmd", "updateCmd"))),
    ),
    "workspaces": ("workspaces", _section(WorkspacesModuleConfig, _WORKSPACES_FIELDS)),
    "system": ("system", _section(SystemModuleConfig, _SYSTEM_FIELDS)),
    "clock": ("clock", _section(ClockModuleConfig, _CLOCK_FIELDS)),
    "settings": ("settings", _section(SettingsModuleConfig, _SETTINGS_FIELDS)),
    "appearance": ("appearance", _section(Appearance, _APPEARANCE_FIELDS)),
    "mediaPlayer": ("media_player", _section(MediaPlayerModuleConfig, _MEDIA_PLAYER_FIELDS)),
}


# --- loading ---------------------------------------------------------------


class _Loader(yaml.SafeLoader):
    """Safe YAML loader that also understands enum variant tags."""


def _construct_targets(loader: yaml.SafeLoader, node: yaml.Node) -> dict:
    return {"Targets": loader.construct_sequence(node)}


def _construct_unit(loader: yaml.SafeLoader, node: yaml.Node) -> str:
    return node.tag.lstrip("!")


_Loader.add_constructor("!Targets", _construct_targets)
_Loader.add_constructor("!All", _construct_unit)
_Loader.add_constructor("!Active", _construct_unit)


def parse_config(text: str) -> Config:
    """Parse a YAML document; an empty document gives the default configuration."""
    try:
        data = yaml.load(text, Loader=_Loader)
    except yaml.YAMLError as error:
        raise ConfigError(str(error)) from None
    if data is None:
        return Config()
    return Config.from_dict(data)


def config_path(home: Optional[Union[str, os.PathLike]] = None) -> Path:
    """Location of the configuration file under ``home`` (default: ``$HOME``)."""
    if home is None:
        home = os.environ.get("HOME")
        if home is None:
            raise ConfigError("could not get HOME environment variable")
    return Path(home) / ".config" / CONFIG_FILE_NAME


def read_config(path: Optional[Union[str, os.PathLike]] = None) -> Config:
    """Read the configuration file, falling back to defaults when it cannot be opened."""
    target = Path(path) if path is not None else config_path()
    try:
        text = target.read_text(encoding="utf-8")
    except OSError:
        return Config()
    log.info("Reading config file")
    return parse_config(text)


def _stamp(path: Path) -> Optional[tuple[int, int, int]]:
    try:
        info = path.stat()
    except OSError:
        return None
    return info.st_ino, info.st_mtime_ns, info.st_size


def watch_config(path: Optional[Union[str, os.PathLike]] = None, interval: float = 1.0,
                 settle: float = 0.5) -> Iterator[Config]:
    """Yield a fresh configuration whenever the file is created, modified or deleted.

    A deleted file yields the default configuration. A modified file is re-read after
    ``settle`` seconds; documents that fail to parse are logged and skipped.
    """
    target = Path(path) if path is not None else config_path()
    last = _stamp(target)
    while True:
        time.sleep(interval)
        current = _stamp(target)
        if current == last:
            continue
        previous, last = last, current
        if current is None:
            log.info("Config file deleted")
            yield Config()
            continue
        if previous is None:
            log.info("Config file created")
        else:
            log.info("Config file modified")
            time.sleep(settle)
            last = _stamp(target)
        try:
            config = read_config(target)
        except ConfigError as error:
            log.warning("Failed to read config file: %s", error)
            continue
        yield config