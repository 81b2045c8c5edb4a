# standsite/sections.py
"""Registry of editable page sections.

Every page section of the public site (home hero, why section, contact map,
...) is one ``SectionSpec``: the fields its copy is made of, which of them
are required, their defaults, and which public paths must be rebuilt when it
changes. The binder in ``standsite.application.sections`` works off this
registry, so adding a section means adding an entry here.
"""
from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Optional, Tuple

FIELD_KINDS = ("text", "richtext", "url", "color", "bool", "int", "float", "list", "choice")


@dataclass(frozen=True)
class Field:
    name: str
    kind: str = "text"
    required: bool = False
    default: Any = None
    choices: Tuple[str, ...] = ()

    def __post_init__(self):
        if self.kind not in FIELD_KINDS:
            raise ValueError(f"Unknown field kind: {self.kind}")

    def default_value(self):
        if self.default is not None:
            return list(self.default) if self.kind == "list" else self.default
        if self.kind == "bool":
            return False
        if self.kind == "list":
            return []
        if self.kind in ("int", "float"):
            return None
        return ""


@dataclass(frozen=True)
class SectionSpec:
    key: str
    label: str
    fields: Tuple[Field, ...]
    revalidate: Tuple[str, ...] = ()

    @property
    def field_names(self):
        return [f.name for f in self.fields]

    def field(self, name) -> Optional[Field]:
        for f in self.fields:
            if f.name == name:
                return f
        return None

    def defaults(self) -> Dict[str, Any]:
        return {f.name: f.default_value() for f in self.fields}


def text(name, required=False, default=None):
    return Field(name, "text", required, default)


def richtext(name, required=False, default=None):
    return Field(name, "richtext", required, default)


def url(name, required=False, default=None):
    return Field(name, "url", required, default)


def color(name, default=None):
    return Field(name, "color", False, default)


def flag(name, default=False):
    return Field(name, "bool", False, default)


def media_type(name="media_type"):
    return Field(name, "choice", False, "image", ("image", "video"))


HOME = ("/",)

SECTIONS: Tuple[SectionSpec, ...] = (
    # Home page
    SectionSpec("home.hero", "Home hero", (
        text("title", required=True, default="Exhibition Stand Builder in Dubai"),
        text("subtitle"),
        media_type("background_type"),
        url("background_image_url"),
        url("background_video_url"),
        text("primary_button_text", default="Request a quotation"),
        url("primary_button_url", default="/contact-us"),
        text("secondary_button_text"),
        url("secondary_button_url"),
        Field("overlay_opacity", "float", default=0.3),
        color("text_color", "#ffffff"),
    ), HOME),
    SectionSpec("home.why", "Why choose us", (
        text("heading", required=True, default="Why Choose Us"),
        color("underline_color", "#a5cd39"),
        text("subtitle"),
        richtext("left_column_text_1"),
        richtext("left_column_text_2"),
        richtext("right_column_text"),
        media_type(),
        url("image_url"),
        text("image_alt"),
        url("video_url"),
        text("image_overlay_heading"),
        text("image_overlay_subheading"),
    ), HOME),
    SectionSpec("home.business", "Business section", (
        text("heading", required=True, default="Your Business Partner"),
        richtext("description"),
        url("image_url"),
        text("cta_text"),
        url("cta_url"),
    ), HOME),
    SectionSpec("home.new-company", "New company", (
        text("heading", required=True, default="Setting Up a New Company?"),
        richtext("description"),
        url("image_url"),
        text("button_text"),
        url("button_url"),
    ), HOME),
    SectionSpec("home.setup-process", "Setup process", (
        text("heading", required=True, default="Our Process"),
        text("subheading"),
        url("image_url"),
    ), HOME),
    SectionSpec("home.essential-support", "Essential support", (
        text("heading", required=True, default="Essential Support"),
        richtext("description"),
        Field("services", "list"),
    ), HOME),
    SectionSpec("home.instagram-feed", "Instagram feed", (
        text("heading", required=True, default="Follow Us on Instagram"),
        text("instagram_handle"),
        url("profile_url"),
        Field("post_limit", "int", default=6),
    ), HOME),

    # About
    SectionSpec("about.hero", "About hero", (
        text("title", required=True, default="About Us"),
        text("subtitle"),
        url("background_image_url"),
    ), ("/about-us",)),
    SectionSpec("about.description", "About description", (
        text("heading", required=True, default="Who We Are"),
        richtext("description", required=True, default="We design and build exhibition stands."),
        url("image_url"),
    ), ("/about-us",)),
    SectionSpec("about.dedication", "About dedication", (
        text("heading", required=True, default="Our Dedication"),
        richtext("description"),
        Field("items", "list"),
    ), ("/about-us",)),

    # Events
    SectionSpec("events.hero", "Events hero", (
        text("main_heading", required=True, default="Welcome to Dubai World Trade Centre"),
        text("sub_heading", default="Dubai's epicentre for events and business in the heart of the city"),
        url("background_image_url"),
        Field("background_overlay_opacity", "float", default=0.3),
        color("background_overlay_color", "#000000"),
        color("text_color", "#ffffff"),
        text("heading_font_size", default="responsive"),
    ), ("/top-trade-shows-in-uae-saudi-arabia-middle-east",)),

    # Custom exhibition stands
    SectionSpec("custom-stand.hero", "Custom stands hero", (
        text("title", required=True, default="Custom Exhibition Stands"),
        text("subtitle"),
        url("background_image_url"),
        text("button_text"),
    ), ("/custom-exhibition-stands-dubai-uae",)),
    SectionSpec("custom-stand.leading-contractor", "Leading contractor", (
        text("heading", required=True, default="Leading Exhibition Stand Contractor"),
        richtext("paragraph_1"),
        richtext("paragraph_2"),
        url("image_url"),
    ), ("/custom-exhibition-stands-dubai-uae",)),
    SectionSpec("custom-stand.looking-for-stands", "Looking for stands", (
        text("heading", required=True, default="Looking for Exhibition Stands?"),
        richtext("content"),
        text("cta_text"),
        url("cta_url"),
        url("background_image_url"),
    ), ("/custom-exhibition-stands-dubai-uae",)),
    SectionSpec("custom-stand.striking-customized", "Striking and customized", (
        text("heading", required=True, default="Striking & Customized Stands"),
        richtext("content"),
        url("image_url"),
    ), ("/custom-exhibition-stands-dubai-uae",)),
    SectionSpec("custom-stand.faq-section", "Custom stands FAQ heading", (
        text("heading", required=True, default="Frequently Asked Questions"),
        text("subheading"),
    ), ("/custom-exhibition-stands-dubai-uae",)),
    SectionSpec("custom-stand.paragraph", "Custom stands paragraph", (
        text("heading"),
        richtext("content", required=True, default="Custom stands built for your brand."),
    ), ("/custom-exhibition-stands-dubai-uae",)),

    # Double decker
    SectionSpec("double-decker.hero", "Double decker hero", (
        text("title", required=True, default="Double Decker Exhibition Stands"),
        text("subtitle"),
        url("background_image_url"),
    ), ("/double-decker-exhibition-stands-in-dubai",)),
    SectionSpec("double-decker.paragraph", "Double decker paragraph", (
        text("heading"),
        richtext("content", required=True, default="Double the space, double the impact."),
    ), ("/double-decker-exhibition-stands-in-dubai",)),
    SectionSpec("double-decker.unique-quality", "Unique quality", (
        text("heading", required=True, default="Unique Quality"),
        richtext("content"),
        url("image_url"),
    ), ("/double-decker-exhibition-stands-in-dubai",)),

    # Expo / country pavilion
    SectionSpec("expo-pavilion.hero", "Expo pavilion hero", (
        text("title", required=True, default="Expo Pavilion Stands"),
        text("subtitle"),
        url("background_image_url"),
    ), ("/expo-pavilion-stands",)),
    SectionSpec("expo-pavilion.intro", "Expo pavilion intro", (
        text("heading", required=True, default="Country Pavilions"),
        richtext("content"),
    ), ("/expo-pavilion-stands",)),
    SectionSpec("expo-pavilion.exceptional-design", "Exceptional design", (
        text("heading", required=True, default="Exceptional Design"),
        richtext("content"),
        url("image_url"),
        Field("benefits", "list"),
    ), ("/expo-pavilion-stands",)),

    # Kiosks
    SectionSpec("kiosk.hero", "Kiosk hero", (
        text("title", required=True, default="Kiosk Design"),
        text("subtitle"),
        url("background_image_url"),
    ), ("/retail-kiosk-design-dubai",)),
    SectionSpec("kiosk.content", "Kiosk content", (
        text("heading", required=True, default="Retail Kiosks"),
        richtext("content"),
        url("image_url"),
    ), ("/retail-kiosk-design-dubai",)),
    SectionSpec("kiosk.benefits", "Kiosk benefits", (
        text("heading", required=True, default="Benefits"),
        Field("benefits", "list"),
    ), ("/retail-kiosk-design-dubai",)),

    # Conference
    SectionSpec("conference.hero", "Conference hero", (
        text("title", required=True, default="Conference Management"),
        text("subtitle"),
        url("background_image_url"),
    ), ("/conference-organizers-in-dubai-uae",)),
    SectionSpec("conference.communicate", "Communicate section", (
        text("heading", required=True, default="Communicate with Impact"),
        richtext("content"),
        url("image_url"),
    ), ("/conference-organizers-in-dubai-uae",)),
    SectionSpec("conference.solution", "Conference solution", (
        text("heading", required=True, default="Complete Conference Solutions"),
        richtext("content"),
        url("image_url"),
    ), ("/conference-organizers-in-dubai-uae",)),

    # Contact
    SectionSpec("contact.hero", "Contact hero", (
        text("title", required=True, default="Contact Us"),
        text("subtitle"),
        url("background_image_url"),
    ), ("/contact-us",)),
    SectionSpec("contact.map", "Contact map", (
        text("heading", default="Find Us"),
        url("map_embed_url", required=True, default="https://www.google.com/maps/embed"),
        text("address"),
        Field("latitude", "float"),
        Field("longitude", "float"),
    ), ("/contact-us",)),
    SectionSpec("contact.form-settings", "Contact form settings", (
        text("form_title", required=True, default="Get in Touch"),
        text("form_subtitle"),
        text("success_message", required=True, default="Thank you!"),
        text("success_description", default="We will get back to you shortly."),
        text("sidebar_phone"),
        text("sidebar_email"),
        text("sidebar_address"),
        flag("enable_file_upload", True),
        Field("max_file_size_mb", "int", default=10),
        Field("allowed_file_types", "list", default=("pdf", "jpg", "png")),
        flag("require_terms_agreement", True),
        text("terms_text", default="I agree to the privacy policy"),
    ), ("/contact-us",)),

    # Standalone pages
    SectionSpec("privacy-policy", "Privacy policy", (
        text("title", required=True, default="Privacy Policy"),
        richtext("content", required=True, default="Privacy policy content."),
        text("meta_title"),
        text("meta_description"),
        text("meta_keywords"),
        text("og_title"),
        text("og_description"),
        url("og_image_url"),
        text("contact_email"),
    ), ("/privacy-policy",)),
    SectionSpec("site-settings", "Site settings", (
        text("site_name", required=True, default="Chronicles Exhibits"),
        url("logo_url"),
        text("phone"),
        text("email"),
        text("address"),
        url("facebook_url"),
        url("instagram_url"),
        url("linkedin_url"),
        url("youtube_url"),
    ), ("/",)),
)

_BY_KEY: Dict[str, SectionSpec] = {spec.key: spec for spec in SECTIONS}


def get_section_spec(key) -> Optional[SectionSpec]:
    return _BY_KEY.get(key)


def all_section_specs():
    return list(SECTIONS)
