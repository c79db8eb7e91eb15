"""Unit tests for chronomaster.registry: FormatRegistry registration and order."""
from __future__ import annotations

import logging
import threading

import pytest

from chronomaster.pattern import DatePattern
from chronomaster.registry import BUILTIN_PATTERNS, FormatRegistry


# ===========================================================================
# Construction
# ===========================================================================


class TestFormatRegistryConstruction:
    def test_builtins_in_priority_order(self, registry: FormatRegistry) -> None:
        assert registry.specs() == list(BUILTIN_PATTERNS)

    def test_day_first_before_month_first(self, registry: FormatRegistry) -> None:
        specs = registry.specs()
        assert specs.index("dd/MM/yyyy") < specs.index("MM/dd/yyyy")

    def test_empty_builtins(self) -> None:
        assert len(FormatRegistry(builtins=())) == 0

    def test_repr_contains_locale_and_size(self, registry: FormatRegistry) -> None:
        assert "en_US" in repr(registry)
        assert str(len(BUILTIN_PATTERNS)) in repr(registry)

    def test_iteration_yields_compiled_patterns(self, registry: FormatRegistry) -> None:
        assert all(isinstance(pattern, DatePattern) for pattern in registry)


# ===========================================================================
# register()
# ===========================================================================


class TestRegister:
    def test_valid_patterns_are_appended_in_order(self, registry: FormatRegistry) -> None:
        added = registry.register(["dd.MM.yyyy", "yyyyMMdd"])
        assert added == 2
        assert registry.specs()[-2:] == ["dd.MM.yyyy", "yyyyMMdd"]

    def test_invalid_pattern_is_skipped_with_warning(
        self, registry: FormatRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        before = registry.specs()
        with caplog.at_level(logging.WARNING, logger="chronomaster.registry.registry"):
            added = registry.register(["not a [pattern"])
        assert added == 0
        assert registry.specs() == before
        assert "not a [pattern" in caplog.text

    def test_mixed_batch_keeps_valid_entries(self, registry: FormatRegistry) -> None:
        size = len(registry)
        added = registry.register(["yyyy/MM/dd", "qqqq", "dd-MMM-yyyy", "{x}"])
        assert added == 2
        assert len(registry) == size + 2
        assert registry.specs()[-2:] == ["yyyy/MM/dd", "dd-MMM-yyyy"]

    def test_length_never_shrinks(self, registry: FormatRegistry) -> None:
        sizes = [len(registry)]
        for batch in (["bad ["], ["HH:mm"], [""], ["HH:mm"]):
            registry.register(batch)
            sizes.append(len(registry))
        assert sizes == sorted(sizes)
        assert sizes[-1] == sizes[0] + 1

    def test_duplicate_is_skipped(self, registry: FormatRegistry) -> None:
        size = len(registry)
        assert registry.register(["dd/MM/yyyy"]) == 0
        assert len(registry) == size

    def test_non_string_is_skipped(
        self, registry: FormatRegistry, caplog: pytest.LogCaptureFixture
    ) -> None:
        with caplog.at_level(logging.WARNING):
            added = registry.register([42, "HH:mm"])  # type: ignore[list-item]
        assert added == 1
        assert "42" in caplog.text

    def test_register_generator(self, registry: FormatRegistry) -> None:
        added = registry.register(spec for spec in ["HH:mm", "HH:mm:ss.SSS"])
        assert added == 2

    def test_bare_string_is_one_pattern(self, registry: FormatRegistry) -> None:
        assert registry.register("dd.MM.yyyy") == 1
        assert registry.specs()[-1] == "dd.MM.yyyy"
        assert "d" not in registry
        assert len(registry) == len(BUILTIN_PATTERNS) + 1

    def test_contains(self, registry: FormatRegistry) -> None:
        assert "dd/MM/yyyy" in registry
        assert DatePattern("MM/dd/yyyy") in registry
        assert "HH:mm" not in registry

    def test_snapshot_not_affected_by_later_register(self, registry: FormatRegistry) -> None:
        snapshot = registry.patterns()
        registry.register(["HH:mm"])
        assert len(snapshot) == len(BUILTIN_PATTERNS)

    def test_concurrent_register_appends_everything(self) -> None:
        registry = FormatRegistry(builtins=())
        batches = [[f"'{n}' HH:mm", f"'{n}' yyyy"] for n in range(8)]
        threads = [threading.Thread(target=registry.register, args=(batch,)) for batch in batches]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()
        assert len(registry) == 16
