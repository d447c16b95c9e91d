"""Button styling.

Buttons come in a fixed set of kinds. A kind provides default colours, a
stored ButtonStyle (managed by admins) overrides those defaults, and colours
set directly on a button override both.
"""

from dataclasses import dataclass
from enum import Enum

DEFAULT_FONT = "Poppins, sans-serif"


class ButtonKind(Enum):
    PRIMARY = "primary"
    SECONDARY = "secondary"
    OUTLINE = "outline"
    GHOST = "ghost"
    CUSTOM = "custom"


@dataclass(frozen=True)
class ButtonStyle:
    """A stored button style."""

    name: str
    background_color: str | None = None
    text_color: str | None = None
    border_color: str | None = None
    border_width: int | None = None
    border_radius: int | None = None
    font_family: str | None = None
    hover_background_color: str | None = None
    hover_text_color: str | None = None


@dataclass(frozen=True)
class CustomColors:
    background: str | None = None
    text: str | None = None
    border: str | None = None

    def __bool__(self) -> bool:
        return bool(self.background or self.text or self.border)


def kind_defaults(kind: ButtonKind) -> dict[str, str]:
    match kind:
        case ButtonKind.PRIMARY:
            return {"background-color": "#4f46e5", "color": "#ffffff", "border": "2px solid #4f46e5"}
        case ButtonKind.SECONDARY:
            return {"background-color": "#e2e8f0", "color": "#0f172a", "border": "2px solid #e2e8f0"}
        case ButtonKind.OUTLINE:
            return {"background-color": "transparent", "color": "#0f172a", "border": "2px solid #0f172a"}
        case ButtonKind.GHOST:
            return {"background-color": "transparent", "color": "#0f172a", "border": "none"}
        case ButtonKind.CUSTOM:
            return {}


def style_css(style: ButtonStyle) -> dict[str, str]:
    css = {
        "background-color": style.background_color or "transparent",
        "color": style.text_color or "#000000",
        "border": "{}px solid {}".format(
            style.border_width if style.border_width is not None else 2,
            style.border_color or "#000000",
        ),
        "border-radius": f"{style.border_radius or 0}px",
        "font-family": style.font_family or DEFAULT_FONT,
    }
    if style.hover_background_color or style.hover_text_color:
        css["--hover-bg"] = style.hover_background_color or css["background-color"]
        css["--hover-text"] = style.hover_text_color or css["color"]
    return css


def custom_css(colors: CustomColors) -> dict[str, str]:
    css = {
        "background-color": colors.background or "transparent",
        "color": colors.text or "#ffffff",
        "font-family": DEFAULT_FONT,
    }
    if colors.border:
        css["border"] = f"2px solid {colors.border}"
    return css


def resolve_button_css(
    kind: ButtonKind,
    style: ButtonStyle | None = None,
    custom: CustomColors | None = None,
) -> dict[str, str]:
    """Return the inline CSS declarations for a button."""
    if custom:
        return custom_css(custom)
    css = {"font-family": DEFAULT_FONT, **kind_defaults(kind)}
    if style is not None:
        css.update(style_css(style))
    return css


def render_css(css: dict[str, str]) -> str:
    return "; ".join(f"{prop}: {value}" for prop, value in css.items())
