"""Open registry of pattern matchers.

The engine evaluates whatever is registered here; adding or removing a
pattern never touches the engine or the other matchers.
"""

from __future__ import annotations

from collections.abc import Iterable, Iterator

from sdlpatterns.patterns.base import Matcher


class PatternRegistry:
    """Matchers keyed by name, iterated in registration order."""

    def __init__(self, matchers: Iterable[Matcher] = ()):
        self._matchers: dict[str, Matcher] = {}
        for matcher in matchers:
            self.register(matcher)

    def register(self, matcher: Matcher) -> Matcher:
        if matcher.name in self._matchers:
            raise ValueError(f"a matcher named {matcher.name!r} is already registered")
        self._matchers[matcher.name] = matcher
        return matcher

    def unregister(self, name: str) -> Matcher:
        try:
            return self._matchers.pop(name)
        except KeyError:
            raise KeyError(f"no matcher named {name!r}") from None

    def get(self, name: str) -> Matcher | None:
        return self._matchers.get(name)

    def __iter__(self) -> Iterator[Matcher]:
        return iter(list(self._matchers.values()))

    def __len__(self) -> int:
        return len(self._matchers)

    def __contains__(self, name: object) -> bool:
        return name in self._matchers

    @property
    def pattern_ids(self) -> list[str]:
        """Distinct pattern ids, in registration order."""
        return list(dict.fromkeys(m.pattern_id for m in self._matchers.values()))

    def select(
        self,
        only: Iterable[str] = (),
        skip: Iterable[str] = (),
    ) -> PatternRegistry:
        """Return a new registry filtered by pattern id or matcher name.

        Unknown ids raise ValueError so a typo on the command line is not
        silently ignored.
        """
        only_set, skip_set = set(only), set(skip)
        known = set(self._matchers) | set(self.pattern_ids)
        unknown = sorted((only_set | skip_set) - known)
        if unknown:
            raise ValueError(f"unknown pattern(s): {', '.join(unknown)}")
        selected = PatternRegistry()
        for matcher in self._matchers.values():
            keys = {matcher.name, matcher.pattern_id}
            if only_set and not keys & only_set:
                continue
            if keys & skip_set:
                continue
            selected.register(matcher)
        return selected


def default_registry() -> PatternRegistry:
    """A fresh registry holding every built-in matcher."""
    from sdlpatterns.patterns.matchers import builtin_matchers

    return PatternRegistry(builtin_matchers())
