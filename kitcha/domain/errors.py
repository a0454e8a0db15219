"""Error taxonomy shared by the shopping and budget logic."""


class InvalidConfiguration(ValueError):
    """Budget configuration or week bounds that cannot be evaluated."""


class UnresolvedReference(LookupError):
    """A meal plan entry points at a recipe that no longer exists."""

    def __init__(self, recipe_id: str):
        super().__init__(f"Recipe '{recipe_id}' not found")
        self.recipe_id = recipe_id
