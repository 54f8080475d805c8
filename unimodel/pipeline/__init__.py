from .finalizer import FinalizedInvocation, finalize
from .dispatcher import fit
from .parallel import fit_many

__all__ = ["FinalizedInvocation", "finalize", "fit", "fit_many"]
