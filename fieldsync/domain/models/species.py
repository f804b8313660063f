"""Common wildlife species offered by the capture flow.

Free-text species are still accepted; "Other" is the catch-all entry.
"""

WILDLIFE_SPECIES: tuple[str, ...] = (
    "White-tailed Deer",
    "Eastern Gray Squirrel",
    "American Black Bear",
    "Wild Turkey",
    "Eastern Cottontail Rabbit",
    "Red Fox",
    "Coyote",
    "Raccoon",
    "Gray Wolf",
    "Bald Eagle",
    "Great Horned Owl",
    "American Robin",
    "Northern Cardinal",
    "Blue Jay",
    "Eastern Bluebird",
    "Pileated Woodpecker",
    "Downy Woodpecker",
    "American Woodcock",
    "Ruffed Grouse",
    "Common Loon",
    "Canada Goose",
    "Mallard Duck",
    "Wood Duck",
    "American Beaver",
    "North American Porcupine",
    "Striped Skunk",
    "Virginia Opossum",
    "Bobcat",
    "Fisher",
    "Pine Marten",
    "River Otter",
    "Moose",
    "Caribou",
    "Snowshoe Hare",
    "Arctic Hare",
    "Muskox",
    "Polar Bear",
    "Grizzly Bear",
    "Bison",
    "Pronghorn",
    "Bighorn Sheep",
    "Mountain Goat",
    "Elk",
    "Mule Deer",
    "Pronghorn Antelope",
    "Mountain Lion",
    "Black-tailed Prairie Dog",
    "American Badger",
    "Wolverine",
    "Lynx",
    "Other",
)


def is_known_species(name: str) -> bool:
    """Case-insensitive membership check against WILDLIFE_SPECIES."""
    needle = name.strip().casefold()
    return any(species.casefold() == needle for species in WILDLIFE_SPECIES)
