"""
Base domain models for Knowledge Tree.

Nodes form a tagged variant: a QuestionNode holds prompt text and two
children, a LeafNode holds exactly one Entity. The two shapes are separate
classes, so a node can never be both.
"""

from enum import Enum
from typing import Union

from pydantic import BaseModel, Field


class GuessState(str, Enum):
    """Terminal states of a traversal."""
    RESOLVED = "resolved"
    INCONCLUSIVE = "inconclusive"


class InconclusiveReason(str, Enum):
    """Why a traversal ended without a confirmed entity."""
    EMPTY_TREE = "empty_tree"
    INPUT_EXHAUSTED = "input_exhausted"
    UNRECOGNIZED_ANSWER = "unrecognized_answer"
    REJECTED = "rejected"
    MISSING_ENTITY = "missing_entity"
    UNKNOWN_TOPIC = "unknown_topic"


class ConfirmationPolicy(str, Enum):
    """What a missing final confirmation token means."""
    STRICT = "strict"                    # Treated as inconclusive
    IMPLICIT_ACCEPT = "implicit_accept"  # Treated as a "yes"


class Entity(BaseModel):
    """
    A possible answer of a topic.

    Entities are immutable and compare equal when their names match,
    regardless of domain or kind. Surrounding whitespace is stripped, so a
    blank name is rejected like an empty one.
    """

    name: str = Field(..., min_length=1, description="Identity key")
    domain: str = Field(default="", description="Free-text category")
    kind: str = Field(default="", description="Free-text subtype")

    model_config = {"frozen": True, "extra": "forbid", "str_strip_whitespace": True}

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Entity):
            return NotImplemented
        return self.name == other.name

    def __hash__(self) -> int:
        return hash(self.name)

    def __str__(self) -> str:
        return f"Entity{{ name='{self.name}', domain='{self.domain}', kind='{self.kind}' }}"


class LeafNode(BaseModel):
    """Terminal node carrying one entity."""

    entity: Entity

    model_config = {"frozen": True, "extra": "forbid"}

    @property
    def is_leaf(self) -> bool:
        return True

    def __str__(self) -> str:
        return f"[LEAF] {self.entity}"


class QuestionNode(BaseModel):
    """Internal node: a yes/no question and the two branches it selects."""

    question: str = Field(..., min_length=1)
    yes: "TreeNode"
    no: "TreeNode"

    model_config = {"frozen": True, "extra": "forbid", "str_strip_whitespace": True}

    @property
    def is_leaf(self) -> bool:
        return False

    def __str__(self) -> str:
        return f'[QUESTION] "{self.question}"'


TreeNode = Union[QuestionNode, LeafNode]

QuestionNode.model_rebuild()


class GuessOutcome(BaseModel):
    """Result of one traversal: a resolved entity name or an inconclusive end."""

    state: GuessState
    entity_name: str | None = None
    reason: InconclusiveReason | None = None
    questions_asked: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @classmethod
    def resolved(cls, entity_name: str, questions_asked: int = 0) -> "GuessOutcome":
        return cls(
            state=GuessState.RESOLVED,
            entity_name=entity_name,
            questions_asked=questions_asked,
        )

    @classmethod
    def inconclusive(
        cls,
        reason: InconclusiveReason,
        questions_asked: int = 0,
    ) -> "GuessOutcome":
        return cls(
            state=GuessState.INCONCLUSIVE,
            reason=reason,
            questions_asked=questions_asked,
        )

    @property
    def is_resolved(self) -> bool:
        return self.state == GuessState.RESOLVED

    def label(self, inconclusive_label: str = "NECUNOSCUT") -> str:
        """Render the result surface string."""
        if self.is_resolved and self.entity_name is not None:
            return self.entity_name
        return inconclusive_label
