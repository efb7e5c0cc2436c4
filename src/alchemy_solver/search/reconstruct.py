"""Path and display-tree reconstruction from search backpointers."""

from typing import Dict, Iterable, List, Optional, Set

from alchemy_solver.catalog.index import CatalogIndex
from alchemy_solver.core.data_models import Recipe, RecipeTree, SearchStep, TreeNode


def reconstruct_path(target: str,
                     backpointers: Dict[str, SearchStep],
                     emitted: Optional[Set[str]] = None) -> List[Recipe]:
    """Walk backpointers from ``target`` down to basic elements.

    Both ingredients of every recipe are followed, and each recipe is emitted
    after the recipes of its own ingredients, so the returned list is in
    basic -> target order. When only one ingredient carries a backpointer this
    is the plain backward walk along the parent chain.

    Args:
        target: Element to reconstruct
        backpointers: Map of discovered element -> step that produced it
        emitted: Results already produced by an earlier part of the path;
            updated in place

    Returns:
        Ordered list of recipes
    """
    if emitted is None:
        emitted = set()

    path: List[Recipe] = []
    # (name, ingredients_done) frames; tier strictness keeps this acyclic
    stack = [(target, False)]
    while stack:
        name, ingredients_done = stack.pop()
        if name in emitted:
            continue
        step = backpointers.get(name)
        if step is None:
            continue
        if ingredients_done:
            emitted.add(name)
            path.append(step.recipe)
            continue
        stack.append((name, True))
        for ingredient in reversed(step.recipe.ingredients):
            if ingredient != name:
                stack.append((ingredient, False))
    return path


def replay_backward(meeting_point: str,
                    backward_steps: Dict[str, SearchStep],
                    forward_steps: Dict[str, SearchStep],
                    emitted: Set[str]) -> List[Recipe]:
    """Turn the backward half of a bidirectional search into forward order.

    Starting at the meeting point, follow the backward backpointers toward the
    target. Before each recipe, the forward sub-path of its other ingredient is
    added when the forward search knows one.
    """
    path: List[Recipe] = []
    current = meeting_point
    while current in backward_steps:
        step = backward_steps[current]
        recipe = step.recipe
        for ingredient in recipe.ingredients:
            if ingredient != current:
                path.extend(reconstruct_path(ingredient, forward_steps, emitted))
        if recipe.result not in emitted:
            emitted.add(recipe.result)
            path.append(recipe)
        current = step.parent
    return path


def build_tree(target: str, path: Iterable[Recipe], catalog: CatalogIndex) -> RecipeTree:
    """Build the display tree for ``path`` rooted at ``target``.

    Each recipe's ingredients are attached below its result; recursion stops at
    basic elements and at names the path does not produce.
    """
    path = list(path)
    recipes_by_result = {recipe.result: recipe for recipe in path}
    tree = RecipeTree(target=target, recipes=path)

    def add_node(name: str, node_type: str) -> None:
        element = catalog.get(name)
        tree.nodes.append(TreeNode(
            id=name,
            tier=catalog.tier_of(name),
            node_type=node_type,
            image_url=element.image_url if element is not None else "",
        ))

    add_node(target, 'target')
    seen = {target}
    expanded: Set[str] = set()

    def attach(name: str) -> None:
        if name in expanded:
            return
        expanded.add(name)
        recipe = recipes_by_result.get(name)
        if recipe is None or (catalog.is_basic(name) and name != target):
            return
        for ingredient in dict.fromkeys(recipe.ingredients):
            if ingredient not in seen:
                add_node(ingredient, 'basic' if catalog.is_basic(ingredient) else 'ingredient')
                seen.add(ingredient)
            tree.edges.append((ingredient, name))
            attach(ingredient)

    attach(target)
    return tree


def is_tier_valid_path(path: Iterable[Recipe], catalog: CatalogIndex) -> bool:
    """Check every recipe of ``path`` against the tier ordering."""
    return all(catalog.is_tier_valid(recipe) for recipe in path)
