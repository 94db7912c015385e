"""Fast-path handler protocols.

A fast-path handler rebuilds one well-known container type directly instead of
letting the generic duplicator copy its slots. Handlers talk to the running
copy only through the CloneContext they are given.

Usage:
    def clone_bag(original: Bag, context: CloneContext) -> Bag:
        result = Bag()
        context.memoize(original, result)
        for item in original:
            result.add(context.clone_complete(item))
        return result

    engine.register_fast_path(Bag, clone_bag)
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from graphclone.core.types import Job


@runtime_checkable
class CloneContext(Protocol):
    """View of one running copy operation, handed to fast-path handlers.

    Deep copies recurse through ``clone``; shallow copies return every value
    unchanged from it, so a handler written once serves both.
    """

    def clone(self, value: Any) -> Any:
        """Clone a contained value.

        The result may still be waiting for its own contents to be populated.
        Safe to store in lists, slots and dict values, not in anything that
        hashes or orders it.
        """
        ...

    def clone_complete(self, value: Any) -> Any:
        """Clone a contained value and finish populating it before returning.

        Use for set elements, dict keys and sorted container members. Values
        reached while completing it are completed too, including ones first
        seen earlier in the traversal. Only a value whose population is
        currently running, i.e. one reached through a cycle, may be returned
        partially built.
        """
        ...

    def lookup(self, original: Any) -> Any | None:
        """Get the clone already recorded for original, or None.

        Immutable containers are built after their elements, so they check
        here whether a cycle through their elements already produced one.
        """
        ...

    def memoize(self, original: Any, clone: Any) -> None:
        """Record clone for original so cycles back to original resolve to it.

        Call before populating a container that may be referenced from its
        own contents. No-op for shallow copies.
        """
        ...

    def schedule(self, job: Job, original: Any = None) -> None:
        """Defer a population step to the context's work stack.

        Deep copies run it after the handler returns, before the top-level
        call completes, or earlier if clone_complete needs original finished.
        Shallow copies run it immediately.

        Args:
            job: Population step.
            original: Object whose clone the job populates.
        """
        ...


@runtime_checkable
class FastPathHandler(Protocol):
    """Rebuilds an instance of one exact container type."""

    def __call__(self, original: Any, context: CloneContext) -> Any:
        """Return a new container of type(original) holding cloned contents.

        Args:
            original: Container to duplicate.
            context: The running copy.

        Returns:
            The new container.
        """
        ...
