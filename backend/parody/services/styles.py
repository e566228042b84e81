"""Parody style registry.

One entry per ``ParodyStyle``: the display name, the rewriting instruction
and example phrases sent to the language model, and image prompt fragments
per image context. Theme CSS lives with the reconstructor.
"""

from dataclasses import dataclass, field

from parody.models.content import ImageContext
from parody.models.parody import ParodyStyle, StyleInfo


@dataclass(frozen=True)
class StyleProfile:
    key: ParodyStyle
    name: str
    instructions: str
    examples: str
    image_prompts: dict[ImageContext, str] = field(default_factory=dict)

    def image_prompt(self, context: ImageContext) -> str:
        return self.image_prompts.get(context) or self.image_prompts.get(
            ImageContext.CONTENT, "High quality illustration"
        )


PARODY_STYLES: dict[ParodyStyle, StyleProfile] = {
    ParodyStyle.CORPORATE_BUZZWORD: StyleProfile(
        key=ParodyStyle.CORPORATE_BUZZWORD,
        name="Corporate Buzzword Overload",
        instructions=(
            "Transform everything into ridiculous corporate speak with the "
            "maximum possible density of buzzwords."
        ),
        examples="synergize, leverage, circle back, take this offline, move the needle",
        image_prompts={
            ImageContext.HERO: "Stock-photo executive in a suit pointing at a rising chart, glossy office",
            ImageContext.LOGO: "Bland enterprise logo in corporate blue and grey",
            ImageContext.CONTENT: "Business people in suits high-fiving in a glass meeting room",
            ImageContext.BACKGROUND: "Modern glass office tower skyline, corporate blue tint",
            ImageContext.ICON: "Minimal corporate icon, flat blue design",
        },
    ),
    ParodyStyle.GEN_Z_BRAINROT: StyleProfile(
        key=ParodyStyle.GEN_Z_BRAINROT,
        name="Gen Z Brain Rot",
        instructions="Make everything sound like TikTok comments and Gen Z slang.",
        examples="no cap, fr fr, it's giving, slay, bussin, ohio, skibidi",
        image_prompts={
            ImageContext.HERO: "Person filming a selfie video under neon ring lights, TikTok aesthetic",
            ImageContext.LOGO: "Logo remixed as a viral meme sticker, neon colours",
            ImageContext.CONTENT: "Phone screen full of emojis and viral comments, neon palette",
            ImageContext.BACKGROUND: "Bedroom gaming setup lit by colourful LED strips",
            ImageContext.ICON: "Bright glossy app-style icon with sparkles",
        },
    ),
    ParodyStyle.MEDIEVAL: StyleProfile(
        key=ParodyStyle.MEDIEVAL,
        name="Medieval Times",
        instructions="Transform the text into medieval and renaissance language.",
        examples="thee, thou, verily, forsooth, mine liege",
        image_prompts={
            ImageContext.HERO: "Renaissance oil portrait of a noble before a castle, illuminated manuscript border",
            ImageContext.LOGO: "Heraldic coat of arms with gothic lettering",
            ImageContext.CONTENT: "Medieval market scene painted in renaissance style",
            ImageContext.BACKGROUND: "Gothic castle courtyard at dusk, oil painting",
            ImageContext.ICON: "Small heraldic shield and sword emblem",
        },
    ),
    ParodyStyle.INFOMERCIAL: StyleProfile(
        key=ParodyStyle.INFOMERCIAL,
        name="Infomercial Madness",
        instructions="Make everything sound like an over-the-top late night infomercial.",
        examples="BUT WAIT THERE'S MORE, Call now!, Only $19.99!, Limited time offer!",
        image_prompts={
            ImageContext.HERO: "Over-enthusiastic TV spokesperson with a huge grin under studio lights",
            ImageContext.LOGO: "Product logo with an AS SEEN ON TV starburst",
            ImageContext.CONTENT: "Cheesy product demonstration on a bright studio set",
            ImageContext.BACKGROUND: "Bright infomercial studio set with price starbursts",
            ImageContext.ICON: "Shiny starburst price tag icon",
        },
    ),
    ParodyStyle.CONSPIRACY: StyleProfile(
        key=ParodyStyle.CONSPIRACY,
        name="Conspiracy Theorist",
        instructions="Make everything sound like a breathless conspiracy theory.",
        examples="they don't want you to know, wake up sheeple, follow the money",
        image_prompts={
            ImageContext.HERO: "Shadowy figure in front of a corkboard covered in red string",
            ImageContext.LOGO: "Logo stamped CLASSIFIED with redaction bars",
            ImageContext.CONTENT: "Blurry surveillance photo with circled details, documentary style",
            ImageContext.BACKGROUND: "Dim basement wall of newspaper clippings joined by red string",
            ImageContext.ICON: "Magnifying glass over an eye, dark palette",
        },
    ),
    ParodyStyle.SIMPSONS: StyleProfile(
        key=ParodyStyle.SIMPSONS,
        name="Springfield Cartoon",
        instructions=(
            "Rewrite everything as if it were a page from a Springfield-style "
            "cartoon town, with catchphrases and small-town absurdity."
        ),
        examples="d'oh, excellent, eat my shorts, mmm... donuts, worst website ever",
        image_prompts={
            ImageContext.HERO: "Cartoon character with yellow skin and big round eyes, Springfield town backdrop",
            ImageContext.LOGO: "Logo redrawn as a bright yellow cartoon sign",
            ImageContext.CONTENT: "Bright cartoon scene with flat shading in a small American town",
            ImageContext.BACKGROUND: "Cartoon town skyline under a bright blue sky with fluffy clouds",
            ImageContext.ICON: "Simple yellow cartoon icon with thick black outline",
        },
    ),
}


def get_style(style: ParodyStyle | str) -> StyleProfile:
    """Look up a style profile.

    Raises:
        ValueError: If *style* is not a known style key.
    """
    try:
        return PARODY_STYLES[ParodyStyle(style)]
    except (KeyError, ValueError):
        raise ValueError(f"Unknown parody style: {style}") from None


def list_styles() -> list[StyleInfo]:
    return [
        StyleInfo(key=profile.key, name=profile.name, description=profile.instructions)
        for profile in PARODY_STYLES.values()
    ]
