"""
Journeys Admin Backend — LLM Prompt Templates

All prompts are defined here. System prompts are injected in llm.py.
"""


# -----------------------------------------------------------------------------
# 1. Location SQL bootstrap
# -----------------------------------------------------------------------------

LOCATION_SQL_SYSTEM_PROMPT = """I am going to give you a list of locations and I need you to create SQL statements for each list to insert into my database table 'locations'. Here is the structure of the table:

id- uuid, primary key, unique, default: gen_random_uuid()
name- text
description- text, nullable
hero_image- text, nullable
latitude- double precision, nullable
longitude- double precision, nullable
address- text, nullable
city- text, nullable
state- text, nullable
zipcode- text, nullable
geofence_radius- integer, nullable
difficulty_level- integer, nullable
estimated_time- integer, nullable
best_time_to_visit- text, nullable
entry_fee- text, nullable
accessibility_info- text, nullable
is_active- boolean, nullable, default: true
is_featured- boolean, nullable, default: false
is_trending- boolean, nullable, default: false
admin_notes- text, nullable
created_at- timestamp with time zone, nullable, default: now()
last_updated_at- timestamp with time zone, nullable, default: now()
created_by- uuid, nullable
website- text, nullable
phone- text, nullable

For each location, you will set the following:
- is_active = true
- is_featured = false
- is_trending = false

Do not include: id, created_at, last_updated_at, created_by as they will auto fill with defaults

difficulty_level is an integer range from 1-5 with 1 being very easy and 5 being extremely difficult (rock climbing, etc. very few if any locations will ever be a 5)

estimated_time is in minutes. So a 1 hour visit would be 60 value

geofence_radius is typically a range from 100-2000 depending on location scale

latitude and longitude should have 4 decimal places

best_time_to_visit is a string and can be anything such as: "Evenings for stargazing; weekdays to avoid crowds" or "Year-round, but spring (March-May) offers the best weather and blooming flowers"

entry_fee and accessibility_info are also strings as needed

admin_notes are not included (will be null until a person actually goes and adds a note)

address should only include street and building/unit numbers if needed.

Descriptions should be at minimum {min_description} characters but no longer than {max_description}

hero_image should be the location name in all lowercase with _ in for spaces and .jpg extension. Example: Griffith Park Observatory -> griffith_park_observatory.jpg. Also any special characters such as & should be removed. So if the location is Park & Gym -> park_gym.jpg

Return ONLY the SQL INSERT statement without any markdown formatting, explanations, or code blocks."""

DESCRIPTION_MIN_CHARS = 250
DESCRIPTION_MAX_CHARS = 600


def build_location_sql_system_prompt() -> str:
    return LOCATION_SQL_SYSTEM_PROMPT.format(
        min_description=DESCRIPTION_MIN_CHARS,
        max_description=DESCRIPTION_MAX_CHARS,
    )


def build_location_sql_prompt(locations: list[str], state: str) -> str:
    """User message for the SQL bootstrap: one location per line, then the state."""
    location_lines = "\n".join(locations)
    return (
        "Create a SQL INSERT statement for the following locations:\n\n"
        f"Locations:\n{location_lines}\n\n"
        f"State:\n{state}"
    )


# -----------------------------------------------------------------------------
# 2. Stamp image prompt
# -----------------------------------------------------------------------------

STAMP_PROMPT_SYSTEM_PROMPT = """I need you to create an image prompt so an image model can generate high level images for me. I will provide you a location in a city and state in the U.S.

Here is an example of a successful image creation: An illustrative flat drawing of Griffith Observatory in Los Angeles, California, featuring the iconic white Art Deco building with its distinctive copper domes perched on the southern slope of Mount Hollywood, overlooking the Los Angeles basin with the downtown skyline visible in the distance, surrounded by chaparral-covered hills and native California vegetation, with the building's three copper domes prominently displayed including the central rotunda dome, rendered in a vintage 1950s postage stamp aesthetic with vibrant, playful colors, geometric shapes, and soft gradients, no text or lettering, no grain, stamp fills entire frame, edge-to-edge composition, no margins, no border space, visible stamp perforations around the edges, transparent background, isolated stamp on transparent background, no background color, square 1:1 aspect ratio.

Return ONLY the image prompt without any markdown formatting, explanations, or code blocks."""


def describe_location(name: str, city: str, state: str) -> str:
    return f"{name} in {city}, {state}"


def build_stamp_prompt_request(name: str, city: str, state: str) -> str:
    return f"Create me a prompt for {describe_location(name, city, state)}"
