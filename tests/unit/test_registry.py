from __future__ import annotations

import pytest

from src.providers.capability import Capability
from src.providers.registry import ProviderRegistry
from src.errors import ProviderSetupError, ProviderNotFoundError
from tests.utils.fakes import FakeSynthesisProvider, FakeGenerationProvider
from tests.utils.runtime import Providers, make_settings, build_registry


@pytest.mark.asyncio
async def test_initialize_activates_configured_providers() -> None:
    providers = Providers()
    registry = await build_registry(make_settings(), providers)

    assert registry.get(Capability.RECOGNITION) is providers.recognition
    assert registry.get(Capability.SYNTHESIS) is providers.synthesis
    assert registry.get(Capability.GENERATION) is providers.generation
    assert registry.names() == {"recognition": "fake", "synthesis": "fake", "generation": "fake"}


@pytest.mark.asyncio
async def test_get_before_initialize_raises() -> None:
    registry = ProviderRegistry()
    with pytest.raises(ProviderNotFoundError):
        registry.get(Capability.SYNTHESIS)


@pytest.mark.asyncio
async def test_unknown_name_raises_not_found() -> None:
    registry = await build_registry(make_settings(), Providers())
    with pytest.raises(ProviderNotFoundError) as exc:
        await registry.change_provider(Capability.SYNTHESIS, "nope")
    assert exc.value.name == "nope"
    assert registry.active_name(Capability.SYNTHESIS) == "fake"


@pytest.mark.asyncio
async def test_failing_initialize_raises_setup_error_and_keeps_old() -> None:
    providers = Providers()
    registry = await build_registry(make_settings(), providers)

    class _Broken(FakeGenerationProvider):
        async def initialize(self, settings: object) -> None:
            raise RuntimeError("no credentials")

    registry.register(Capability.GENERATION, "broken", _Broken)
    with pytest.raises(ProviderSetupError) as exc:
        await registry.change_provider(Capability.GENERATION, "broken")

    assert "no credentials" in str(exc.value)
    assert registry.get(Capability.GENERATION) is providers.generation


@pytest.mark.asyncio
async def test_change_provider_swaps_and_retires_old_instance() -> None:
    providers = Providers()
    registry = await build_registry(make_settings(), providers)
    replacement = FakeSynthesisProvider()
    registry.register(Capability.SYNTHESIS, "Other", lambda: replacement)

    await registry.change_provider(Capability.SYNTHESIS, "other")

    assert registry.get(Capability.SYNTHESIS) is replacement
    assert registry.active_name(Capability.SYNTHESIS) == "other"
    # The replaced instance is not closed while calls may still hold it.
    assert providers.synthesis.closed is False

    await registry.shutdown()
    assert providers.synthesis.closed is True
    assert replacement.closed is True
    assert providers.recognition.closed is True


def test_available_lists_registered_names() -> None:
    registry = ProviderRegistry()
    registry.register(Capability.SYNTHESIS, "b", FakeSynthesisProvider)
    registry.register(Capability.SYNTHESIS, "a", FakeSynthesisProvider)
    assert registry.available(Capability.SYNTHESIS) == ["a", "b"]
    with pytest.raises(ValueError):
        registry.register(Capability.SYNTHESIS, "  ", FakeSynthesisProvider)


@pytest.mark.asyncio
async def test_retired_instances_beyond_the_cap_are_closed() -> None:
    providers = Providers()
    registry = ProviderRegistry(max_retired=1)
    registry.register(Capability.RECOGNITION, "fake", lambda: providers.recognition)
    registry.register(Capability.SYNTHESIS, "fake", lambda: providers.synthesis)
    registry.register(Capability.GENERATION, "fake", lambda: providers.generation)
    await registry.initialize(make_settings())
    second, third = FakeSynthesisProvider(), FakeSynthesisProvider()
    registry.register(Capability.SYNTHESIS, "second", lambda: second)
    registry.register(Capability.SYNTHESIS, "third", lambda: third)

    await registry.change_provider(Capability.SYNTHESIS, "second")
    assert providers.synthesis.closed is False

    await registry.change_provider(Capability.SYNTHESIS, "third")
    assert providers.synthesis.closed is True
    assert second.closed is False
    assert third.closed is False

    # Swapping back to a still-live instance never closes the active one.
    await registry.change_provider(Capability.SYNTHESIS, "second")
    assert second.closed is False
    assert registry.get(Capability.SYNTHESIS) is second
