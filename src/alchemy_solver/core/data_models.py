"""Core data models for the alchemy solver."""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple


# Tier reported for names that are not part of the catalog
UNKNOWN_TIER = -1


@dataclass(frozen=True)
class Element:
    """A catalog element with its tier and raw recipes as declared."""

    name: str
    tier: int
    recipes: Tuple[Tuple[str, ...], ...] = ()
    image_url: str = ""

    def __post_init__(self) -> None:
        """Validate element properties."""
        assert self.name, "Element must have a name"
        assert self.tier >= 0, f"Tier of {self.name} cannot be negative, got {self.tier}"


@dataclass(frozen=True)
class Recipe:
    """Combination of two ingredients producing a result."""

    ingredients: Tuple[str, str]
    result: str

    def sorted_ingredients(self) -> Tuple[str, ...]:
        return tuple(sorted(self.ingredients))

    def other_ingredient(self, name: str) -> str:
        """Return the ingredient paired with ``name`` in this recipe."""
        first, second = self.ingredients
        return second if first == name else first

    def to_dict(self) -> Dict[str, Any]:
        return {'ingredients': list(self.ingredients), 'result': self.result}

    def __str__(self) -> str:
        return f"{self.ingredients[0]} + {self.ingredients[1]} -> {self.result}"


@dataclass(frozen=True)
class SearchStep:
    """Backpointer recorded when a search discovers an element."""

    parent: str
    recipe: Recipe


@dataclass
class TreeNode:
    """Node of the display tree."""

    id: str
    tier: int
    node_type: str  # 'target', 'basic' or 'ingredient'
    image_url: str = ""

    def to_dict(self) -> Dict[str, Any]:
        return {
            'id': self.id,
            'label': self.id,
            'type': self.node_type,
            'tier': self.tier,
            'imageUrl': self.image_url,
        }


@dataclass
class RecipeTree:
    """Display tree rooted at the target; edges run ingredient -> result."""

    target: str
    nodes: List[TreeNode] = field(default_factory=list)
    edges: List[Tuple[str, str]] = field(default_factory=list)
    recipes: List[Recipe] = field(default_factory=list)

    def node(self, name: str) -> Optional[TreeNode]:
        for node in self.nodes:
            if node.id == name:
                return node
        return None

    def children_of(self, name: str) -> List[str]:
        """Ingredients attached below ``name`` in the tree."""
        return [source for source, target in self.edges if target == name]

    def to_dict(self) -> Dict[str, Any]:
        return {
            'target': self.target,
            'nodes': [n.to_dict() for n in self.nodes],
            'edges': [
                {'id': f"{source}-{target}", 'source': source, 'target': target}
                for source, target in self.edges
            ],
            'recipes': [r.to_dict() for r in self.recipes],
        }


def path_signature(path: List[Recipe]) -> str:
    """Canonical token for a recipe path.

    Each step becomes ``result:ingredient+ingredient`` with the ingredient pair
    sorted, and steps are joined in path order, so two paths share a signature
    exactly when they apply the same combinations in the same order.
    """
    return "|".join(
        f"{recipe.result}:{'+'.join(recipe.sorted_ingredients())}" for recipe in path
    )


@dataclass
class SearchResult:
    """Result of a single path search."""

    target: str
    path: List[Recipe]
    visited_nodes: int
    execution_time: float  # seconds
    tree: Optional[RecipeTree] = None
    algorithm: str = "unknown"
    variation_index: Optional[int] = None
    meeting_point: Optional[str] = None

    @property
    def steps(self) -> int:
        return len(self.path)

    @property
    def signature(self) -> str:
        return path_signature(self.path)

    def to_dict(self) -> Dict[str, Any]:
        """Convert result to a JSON-serializable dictionary."""
        return {
            'target': self.target,
            'algorithm': self.algorithm,
            'path': [r.to_dict() for r in self.path],
            'steps': self.steps,
            'visited_nodes': self.visited_nodes,
            'execution_time': self.execution_time,
            'tree': self.tree.to_dict() if self.tree is not None else None,
            'variation_index': self.variation_index,
            'meeting_point': self.meeting_point,
            'signature': self.signature,
        }
