"""
Closed registry of the icons the console can show for modules and providers.

Names are the kebab-case icon names stored in the database; each maps to
the PascalCase component name of the icon set used by the web client.
Unknown names resolve to DEFAULT_ICON.
"""

from typing import Dict, List, NamedTuple, Optional

DEFAULT_ICON = "package"


class IconHandle(NamedTuple):
    name: str
    component: str


ICON_NAMES = (
    "activity", "airplay", "alert-circle", "alert-triangle", "archive", "arrow-down",
    "arrow-up", "bar-chart", "battery", "bell", "bluetooth", "book", "bookmark",
    "box", "briefcase", "calendar", "camera", "cast", "check", "check-circle",
    "check-square", "chevron-down", "chevron-left", "chevron-right", "chevron-up",
    "clipboard", "clock", "cloud", "code", "codepen", "coffee", "command", "compass",
    "copy", "cpu", "credit-card", "crop", "database", "delete", "disc", "dollar-sign",
    "download", "droplet", "edit", "edit-2", "edit-3", "external-link", "eye",
    "eye-off", "facebook", "fast-forward", "feather", "file", "file-minus", "file-plus",
    "file-text", "film", "filter", "flag", "folder", "folder-minus", "folder-plus",
    "gift", "git-branch", "git-commit", "git-merge", "git-pull-request", "github",
    "gitlab", "globe", "grid", "hard-drive", "hash", "headphones", "heart", "help-circle",
    "home", "image", "inbox", "info", "instagram", "key", "layers", "layout", "link",
    "link-2", "linkedin", "list", "loader", "lock", "log-in", "log-out", "mail", "map",
    "map-pin", "maximize", "maximize-2", "menu", "message-circle", "message-square", "mic",
    "mic-off", "minimize", "minimize-2", "minus", "minus-circle", "minus-square", "monitor",
    "moon", "more-horizontal", "more-vertical", "mouse-pointer", "move", "music",
    "navigation", "navigation-2", "octagon", "package", "paperclip", "pause",
    "pause-circle", "percent", "phone", "phone-call", "phone-forwarded", "phone-incoming",
    "phone-missed", "phone-off", "phone-outgoing", "pie-chart", "play", "play-circle",
    "plus", "plus-circle", "plus-square", "pocket", "power", "printer", "radio",
    "refresh-ccw", "refresh-cw", "repeat", "rewind", "rotate-ccw", "rotate-cw", "rss",
    "save", "scale", "scissors", "search", "send", "server", "settings", "share",
    "share-2", "shield", "shield-off", "shopping-bag", "shopping-cart", "shuffle",
    "sidebar", "skip-back", "skip-forward", "slack", "slash", "sliders", "smartphone",
    "speaker", "square", "star", "stop-circle", "sun", "sunrise", "sunset", "tablet",
    "tag", "target", "terminal", "thermometer", "thumbs-down", "thumbs-up", "toggle-left",
    "toggle-right", "trash", "trash-2", "trello", "trending-down", "trending-up",
    "triangle", "truck", "tv", "twitter", "type", "umbrella", "underline", "unlock",
    "upload", "user", "user-check", "user-minus", "user-plus", "user-x", "users", "video",
    "video-off", "voicemail", "volume", "volume-1", "volume-2", "volume-x", "watch",
    "wifi", "wifi-off", "wind", "x", "x-circle", "x-square", "youtube", "zap", "zoom-in",
    "zoom-out",
)  # fmt: skip


def component_name(icon_name: str) -> str:
    """'file-text' -> 'FileText', 'edit-2' -> 'Edit2'."""
    return "".join(part[:1].upper() + part[1:] for part in icon_name.split("-"))


ICON_REGISTRY: Dict[str, IconHandle] = {
    name: IconHandle(name, component_name(name)) for name in ICON_NAMES
}


def resolve_icon(name: Optional[str]) -> IconHandle:
    """Handle for ``name``; DEFAULT_ICON for empty or unknown names. Never raises."""
    if not name:
        return ICON_REGISTRY[DEFAULT_ICON]
    return ICON_REGISTRY.get(name.strip().lower(), ICON_REGISTRY[DEFAULT_ICON])


def is_known_icon(name: Optional[str]) -> bool:
    return bool(name) and name.strip().lower() in ICON_REGISTRY


def search_icons(term: Optional[str]) -> List[str]:
    """Icon names containing ``term``, case-insensitive. Empty term returns all."""
    if not term:
        return list(ICON_NAMES)
    needle = term.strip().lower()
    return [name for name in ICON_NAMES if needle in name]
