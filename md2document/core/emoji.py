"""Emoji shortcode expansion."""

from typing import Optional

from rich.emoji import Emoji, NoEmoji


def lookup_emoji(name: str) -> Optional[str]:
    """returns the glyph for a shortcode name, or None if unknown."""
    try:
        return str(Emoji(name))
    except NoEmoji:
        return None


def substitute_emoji(text: str) -> str:
    """
    replaces :shortcode: sequences with emoji glyphs.

    Unknown shortcodes are kept verbatim, colons included, as is a trailing
    shortcode with no closing colon.

    Args:
        text: content of a single text token

    Returns:
        text with known shortcodes replaced
    """
    if ":" not in text:
        return text

    output: list[str] = []
    name: list[str] = []
    in_shortcode = False

    for char in text:
        if char != ":":
            (name if in_shortcode else output).append(char)
            continue

        if not in_shortcode:
            in_shortcode = True
            continue

        identifier = "".join(name)
        glyph = lookup_emoji(identifier)
        output.append(glyph if glyph is not None else f":{identifier}:")
        name.clear()
        in_shortcode = False

    if in_shortcode:
        output.append(":" + "".join(name))

    return "".join(output)
