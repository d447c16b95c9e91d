from theming.buttons import ButtonKind, ButtonStyle, CustomColors, render_css, resolve_button_css

__all__ = ["ButtonKind", "ButtonStyle", "CustomColors", "render_css", "resolve_button_css"]
