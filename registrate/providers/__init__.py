"""Data providers that turn data callbacks into JSON resource files."""

from pathlib import Path

from .base import RegistrateProvider
from .context import DataGenContext
from .item_model import RegistrateItemModelProvider
from .lang import RegistrateLangProvider
from .provider_type import ProviderType
from .recipe import RegistrateRecipeProvider
from .tags import RegistrateItemTagsProvider, TagBuilder

PROVIDER_CLASSES: dict[ProviderType, type[RegistrateProvider]] = {
    ProviderType.ITEM_MODEL: RegistrateItemModelProvider,
    ProviderType.LANG: RegistrateLangProvider,
    ProviderType.RECIPE: RegistrateRecipeProvider,
    ProviderType.ITEM_TAGS: RegistrateItemTagsProvider,
}


def create_provider(
    provider_type: ProviderType, mod_id: str, output_dir: Path | str, **kwargs
) -> RegistrateProvider:
    """Instantiate the provider class registered for ``provider_type``."""
    return PROVIDER_CLASSES[provider_type](mod_id, output_dir, **kwargs)


__all__ = [
    "DataGenContext",
    "PROVIDER_CLASSES",
    "ProviderType",
    "RegistrateItemModelProvider",
    "RegistrateItemTagsProvider",
    "RegistrateLangProvider",
    "RegistrateProvider",
    "RegistrateRecipeProvider",
    "TagBuilder",
    "create_provider",
]
