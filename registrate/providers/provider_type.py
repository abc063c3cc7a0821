from enum import Enum


class ProviderType(Enum):
    """Kinds of data-generation output. Providers run in declaration order."""

    ITEM_MODEL = "item_model"
    LANG = "lang"
    RECIPE = "recipe"
    ITEM_TAGS = "item_tags"
