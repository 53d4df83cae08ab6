"""Prompt construction for reference-guided image generation."""

from typing import Optional

from ..models.generation import PRESENT_DAY, ReferenceSource, StreetViewPov

# Keys are lower-cased style names
STYLE_DESCRIPTIONS = {
    "comic": (
        "Render it as a bold comic-book panel: thick black ink outlines, flat saturated "
        "colors, halftone shading and dynamic, exaggerated perspective."
    ),
    "realistic": (
        "Render it as a photorealistic photograph with natural lighting, accurate "
        "materials, true-to-life proportions and fine surface detail."
    ),
    "futuristic": (
        "Reimagine it as a sleek futuristic city: glass and chrome surfaces, holographic "
        "signage, glowing neon accents, flying vehicles and advanced technology everywhere."
    ),
    "destroyed": (
        "Show the place in ruins after a catastrophe: collapsed walls, rubble in the "
        "streets, shattered windows, abandoned vehicles and dust hanging in the air."
    ),
    "on fire": (
        "Show the place engulfed in a huge fire: roaring flames on the buildings, thick "
        "black smoke, glowing embers and an orange, apocalyptic sky."
    ),
    "flooded": (
        "Show the place submerged by a massive flood: murky water filling the streets up "
        "to the first floors, floating debris, and reflections on the water surface."
    ),
}

ERA_DESCRIPTIONS = {
    "ancient rome": (
        "Set the scene in Ancient Rome: marble temples, columns and arches, cobbled "
        "roads, togas, chariots and market stalls replace modern buildings and vehicles."
    ),
    "medieval times": (
        "Set the scene in medieval times: stone castles and timber-framed houses, muddy "
        "lanes, torches, carts, banners and period clothing."
    ),
    "1920s art deco": (
        "Set the scene in the 1920s Art Deco era: geometric facades, gilded ornaments, "
        "vintage automobiles, streetcars and Roaring Twenties fashion."
    ),
    "1980s cyberpunk": (
        "Set the scene in a 1980s cyberpunk vision: rain-soaked streets, neon signs, "
        "CRT screens, tangled cables and retro-futuristic gadgets."
    ),
    "distant future": (
        "Set the scene in the distant future: towering megastructures, floating "
        "platforms, unfamiliar materials and technology far beyond today."
    ),
    "prehistoric": (
        "Set the scene in prehistoric times: untouched wilderness, caves, primitive "
        "shelters, campfires and no trace of modern construction."
    ),
}

CLOSING = (
    "The result should be a creative interpretation, not a literal copy. "
    "Do not include any text, labels, watermarks or map artifacts in the final image."
)


def _normalize(value: str) -> str:
    return " ".join(value.split()).lower()


def is_present_day(time_period: str) -> bool:
    """Whether the era is the baseline that needs no era clause."""
    return _normalize(time_period) == _normalize(PRESENT_DAY)


def describe_style(style: str) -> str:
    """Descriptive clause for a style, with a generic fallback."""
    description = STYLE_DESCRIPTIONS.get(_normalize(style))
    if description:
        return description
    return (
        f"Strong {style} aesthetic: apply the {style} look consistently to every "
        "building, surface, object and character in the scene."
    )


def describe_era(time_period: str) -> Optional[str]:
    """Descriptive clause for an era, or None for the present day."""
    if is_present_day(time_period):
        return None
    description = ERA_DESCRIPTIONS.get(_normalize(time_period))
    if description:
        return description
    return (
        f"Imagine the scene is taking place in the {time_period} era: adapt the "
        "architecture, vehicles, clothing and technology to that period."
    )


def describe_population(population: str) -> str:
    """Clauses insisting the scene is inhabited only by the population."""
    return (
        f"The scene is populated exclusively by {population}. "
        f"Every figure walking, standing, driving or working in the image must be "
        f"{population}; do not show any other kind of people or creatures. "
        f"Show {population} going about their everyday activities in this place."
    )


def describe_source(
    source: ReferenceSource = ReferenceSource.STREET_VIEW,
    pov: Optional[StreetViewPov] = None,
) -> str:
    """Opening clause explaining what the reference image is."""
    if source == ReferenceSource.MAP:
        return (
            "Based on this map, generate a new, highly detailed street-level image of "
            "the place marked by the red pin, as seen by someone standing there. "
            "Keep the street layout, open spaces and surroundings shown on the map."
        )

    text = (
        "Based on this street-level photograph, generate a new, highly detailed image "
        "of the same place from the same viewpoint. Keep the recognizable layout, "
        "landmarks and composition of the photograph."
    )
    if pov is not None:
        text += (
            f" The camera faces a heading of {pov.heading:g} degrees with a pitch of "
            f"{pov.pitch:g} degrees."
        )
    return text


def build_prompt(
    style: str,
    population: str,
    time_period: str = PRESENT_DAY,
    source: ReferenceSource = ReferenceSource.STREET_VIEW,
    pov: Optional[StreetViewPov] = None,
) -> str:
    """
    Build the instruction sent to the model alongside the reference image.

    Args:
        style: Visual style (catalog value or free text)
        population: Who inhabits the scene, used verbatim
        time_period: Era; the present day adds no era clause
        source: What kind of reference image accompanies the prompt
        pov: Street View orientation, mentioned for street-level references

    Returns:
        Prompt text
    """
    parts = [
        describe_source(source, pov),
        describe_style(style),
        describe_population(population),
    ]

    era = describe_era(time_period)
    if era:
        parts.append(era)

    parts.append(CLOSING)
    return "\n\n".join(parts)
