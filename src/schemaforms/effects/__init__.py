"""Submit effects."""

from schemaforms.effects.http import HttpSubmitEffect
from schemaforms.effects.simulated import DelayedSubmitEffect
from schemaforms.typing.protocol import SubmitEffect

__all__ = [
    "DelayedSubmitEffect",
    "HttpSubmitEffect",
    "SubmitEffect",
]
