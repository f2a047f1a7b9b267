"""Tests for Translator loading, locale switching and load deduplication."""

import asyncio
from unittest.mock import MagicMock

import pytest

from polyglot.events import LocaleChangedEvent, TranslationsLoadedEvent, TranslatorEvent
from polyglot.i18n import Translator, TranslatorConfig
from polyglot.i18n.exceptions import LoaderError, UnsupportedLocaleError
from polyglot.i18n.loader import create_dict_loader
from tests.factories.i18n import FailingLoader, RecordingLoader, make_translator

pytestmark = pytest.mark.unit

GERMAN = {"greet": "Hallo", "errors": {"notFound": "Nicht gefunden"}}


class ListLoader:
    """Loader returning a value that is not a translation tree."""

    name = "list"

    async def load(self, locale):
        return ["not", "a", "tree"]


class BrokenSupportsLoader:
    """Loader whose supports() check raises."""

    name = "broken-supports"

    def __init__(self):
        self.calls = []

    async def load(self, locale):
        self.calls.append(locale)
        return GERMAN

    def supports(self, locale):
        raise RuntimeError("supports failed")


class TestLoaderRegistry:
    """Tests for use(), remove_loader() and get_loaders()."""

    def test_use_is_chainable(self, translator):
        first = RecordingLoader({}, name="first")
        second = RecordingLoader({}, name="second")

        assert translator.use(first).use(second) is translator
        assert translator.get_loaders() == [first, second]

    def test_remove_loader(self, translator):
        translator.use(RecordingLoader({}, name="a")).use(RecordingLoader({}, name="b"))

        assert translator.remove_loader("a") is True
        assert translator.remove_loader("a") is False
        assert [loader.name for loader in translator.get_loaders()] == ["b"]

    def test_get_loaders_returns_copy(self, translator):
        translator.get_loaders().append(RecordingLoader({}))
        assert translator.get_loaders() == []


class TestLoadTranslations:
    """Tests for load_translations()."""

    @pytest.mark.asyncio
    async def test_loads_and_emits(self, translator, event_recorder):
        recorded = event_recorder(translator.events)
        translator.use(RecordingLoader({"de": GERMAN}))

        await translator.load_translations("de")

        assert translator.t("greet", locale="de") == "Hallo"
        assert recorded[TranslatorEvent.TRANSLATIONS_LOADED] == [
            TranslationsLoadedEvent(locale="de", count=2)
        ]

    @pytest.mark.asyncio
    async def test_concurrent_loads_share_one_call(self, translator):
        loader = RecordingLoader({"de": GERMAN}, delay=0.01)
        translator.use(loader)

        await asyncio.gather(
            translator.load_translations("de"),
            translator.load_translations("de"),
            translator.load_translations("DE"),
        )

        assert loader.calls == ["de"]
        assert translator.t("greet", locale="de") == "Hallo"

    @pytest.mark.asyncio
    async def test_cancelled_caller_does_not_cancel_shared_load(self, translator):
        loader = RecordingLoader({"de": GERMAN}, delay=0.05)
        translator.use(loader)

        first = asyncio.ensure_future(translator.load_translations("de"))
        await asyncio.sleep(0)
        second = asyncio.ensure_future(translator.load_translations("de"))
        await asyncio.sleep(0)
        first.cancel()

        results = await asyncio.gather(first, second, return_exceptions=True)

        assert isinstance(results[0], asyncio.CancelledError)
        assert results[1] is None
        assert loader.calls == ["de"]
        assert translator.t("greet", locale="de") == "Hallo"
        assert translator._loading == {}

    @pytest.mark.asyncio
    async def test_raising_supports_is_reported(self, translator, event_recorder):
        recorded = event_recorder(translator.events)
        broken = BrokenSupportsLoader()
        fallback = RecordingLoader({"de": GERMAN}, name="fallback")
        translator.use(broken).use(fallback)

        await translator.load_translations("de")

        errors = recorded[TranslatorEvent.ERROR]
        assert len(errors) == 1
        assert str(errors[0].error) == "supports failed"
        assert broken.calls == []
        assert fallback.calls == ["de"]
        assert translator.t("greet", locale="de") == "Hallo"

    @pytest.mark.asyncio
    async def test_sequential_loads_call_again(self, translator):
        loader = RecordingLoader({"de": GERMAN})
        translator.use(loader)

        await translator.load_translations("de")
        await translator.load_translations("de")

        assert loader.calls == ["de", "de"]
        assert translator._loading == {}

    @pytest.mark.asyncio
    async def test_distinct_locales_load_separately(self, translator):
        loader = RecordingLoader({"de": GERMAN, "it": {"greet": "Ciao"}}, delay=0.01)
        translator.use(loader)

        await asyncio.gather(
            translator.load_translations("de"), translator.load_translations("it")
        )

        assert sorted(loader.calls) == ["de", "it"]

    @pytest.mark.asyncio
    async def test_failing_loader_falls_through(self, translator, event_recorder):
        recorded = event_recorder(translator.events)
        failing = FailingLoader()
        fallback = RecordingLoader({"de": GERMAN}, name="fallback")
        translator.use(failing).use(fallback)

        await translator.load_translations("de")

        errors = recorded[TranslatorEvent.ERROR]
        assert len(errors) == 1
        assert isinstance(errors[0].error, LoaderError)
        assert errors[0].context == (
            'Failed to load translations for locale "de" using loader "failing"'
        )
        assert fallback.calls == ["de"]
        assert translator.t("greet", locale="de") == "Hallo"

    @pytest.mark.asyncio
    async def test_first_successful_loader_wins(self, translator):
        first = RecordingLoader({"de": {"greet": "Servus"}}, name="first")
        second = RecordingLoader({"de": GERMAN}, name="second")
        translator.use(first).use(second)

        await translator.load_translations("de")

        assert translator.t("greet", locale="de") == "Servus"
        assert second.calls == []

    @pytest.mark.asyncio
    async def test_empty_result_tries_next_loader(self, translator, event_recorder):
        recorded = event_recorder(translator.events)
        empty = RecordingLoader({}, name="empty")
        full = RecordingLoader({"de": GERMAN}, name="full")
        translator.use(empty).use(full)

        await translator.load_translations("de")

        assert empty.calls == ["de"]
        assert full.calls == ["de"]
        assert recorded[TranslatorEvent.ERROR] == []

    @pytest.mark.asyncio
    async def test_non_mapping_result_is_an_error(self, translator, event_recorder):
        recorded = event_recorder(translator.events)
        translator.use(ListLoader())

        await translator.load_translations("de")

        errors = recorded[TranslatorEvent.ERROR]
        assert len(errors) == 1
        assert isinstance(errors[0].error, LoaderError)

    @pytest.mark.asyncio
    async def test_unsupported_loader_is_skipped(self, translator):
        french_only = RecordingLoader({"fr": {}}, name="fr-only", supported=["fr"])
        general = RecordingLoader({"de": GERMAN}, name="general")
        translator.use(french_only).use(general)

        await translator.load_translations("de")

        assert french_only.calls == []
        assert general.calls == ["de"]

    @pytest.mark.asyncio
    async def test_all_loaders_failing_does_not_raise(self, translator, event_recorder):
        recorded = event_recorder(translator.events)
        translator.use(FailingLoader("one")).use(FailingLoader("two"))

        await translator.load_translations("de")

        assert len(recorded[TranslatorEvent.ERROR]) == 2
        assert recorded[TranslatorEvent.TRANSLATIONS_LOADED] == []
        assert "de" not in translator.get_available_locales()
        assert translator.t("greet", locale="de") == "Hello"

    @pytest.mark.asyncio
    async def test_unexpected_exception_is_reported(self, translator, event_recorder):
        recorded = event_recorder(translator.events)
        loader = MagicMock()
        loader.name = "broken"
        loader.supports.return_value = True
        loader.load.side_effect = RuntimeError("boom")
        translator.use(loader)

        await translator.load_translations("de")

        errors = recorded[TranslatorEvent.ERROR]
        assert len(errors) == 1
        assert str(errors[0].error) == "boom"

    @pytest.mark.asyncio
    async def test_exhausted_loaders_logged_in_debug(self):
        log = MagicMock()
        translator = Translator(TranslatorConfig(debug=True), logger=log)
        translator.use(FailingLoader())

        await translator.load_translations("de")

        log.warning.assert_called_once_with("no_loader_could_load_locale", locale="de")

    @pytest.mark.asyncio
    async def test_loaded_data_merges_into_existing(self, translator):
        translator.use(create_dict_loader({"fr": {"greet": "Bonjour"}}))

        await translator.load_translations("fr")

        assert translator.t("greet", locale="fr") == "Bonjour"
        assert translator.t("errors.notFound", locale="fr") == "Introuvable"

    @pytest.mark.asyncio
    async def test_preload_translations(self, translator):
        loader = RecordingLoader({"de": GERMAN, "it": {"greet": "Ciao"}})
        translator.use(loader)

        await translator.preload_translations(["de", "it", "xx"])

        assert sorted(loader.calls) == ["de", "it", "xx"]
        assert translator.t("greet", locale="it") == "Ciao"
        assert translator.t("greet", locale="de") == "Hallo"


class TestSetLocale:
    """Tests for set_locale()."""

    @pytest.mark.asyncio
    async def test_switches_and_emits(self, translator, event_recorder):
        recorded = event_recorder(translator.events)

        await translator.set_locale("fr")

        assert translator.get_locale() == "fr"
        assert translator.t("welcome", values={"name": "Ana"}) == "Bienvenue, Ana !"
        assert recorded[TranslatorEvent.LOCALE_CHANGED] == [
            LocaleChangedEvent(previous_locale="en", new_locale="fr")
        ]

    @pytest.mark.asyncio
    async def test_same_locale_is_noop(self, translator, event_recorder):
        recorded = event_recorder(translator.events)

        await translator.set_locale("EN")

        assert translator.get_locale() == "en"
        assert recorded[TranslatorEvent.LOCALE_CHANGED] == []

    @pytest.mark.asyncio
    async def test_loads_before_locale_changed(self, translator):
        translator.use(RecordingLoader({"de": GERMAN}))
        seen = []
        translator.on(
            TranslatorEvent.LOCALE_CHANGED,
            lambda event: seen.append(translator.t("greet")),
        )

        await translator.set_locale("de")

        assert seen == ["Hallo"]

    @pytest.mark.asyncio
    async def test_existing_data_skips_loading(self, translator):
        loader = RecordingLoader({"fr": {"greet": "Bonjour"}})
        translator.use(loader)

        await translator.set_locale("fr")

        assert loader.calls == []

    @pytest.mark.asyncio
    async def test_raising_supports_does_not_break_switch(self, translator, event_recorder):
        recorded = event_recorder(translator.events)
        translator.use(BrokenSupportsLoader())

        await translator.set_locale("de")

        assert translator.get_locale() == "de"
        assert len(recorded[TranslatorEvent.ERROR]) == 1
        assert recorded[TranslatorEvent.LOCALE_CHANGED] == [
            LocaleChangedEvent(previous_locale="en", new_locale="de")
        ]

    @pytest.mark.asyncio
    async def test_failed_load_still_switches(self, translator, event_recorder):
        recorded = event_recorder(translator.events)
        translator.use(FailingLoader())

        await translator.set_locale("de")

        assert translator.get_locale() == "de"
        assert translator.t("greet") == "Hello"
        assert len(recorded[TranslatorEvent.ERROR]) == 1
        assert len(recorded[TranslatorEvent.LOCALE_CHANGED]) == 1

    @pytest.mark.asyncio
    async def test_unsupported_locale_raises(self, event_recorder):
        translator = make_translator(supported_locales=["en", "fr"])
        recorded = event_recorder(translator.events)

        with pytest.raises(UnsupportedLocaleError, match="Unsupported locale: de"):
            await translator.set_locale("de")

        assert translator.get_locale() == "en"
        assert recorded[TranslatorEvent.LOCALE_CHANGED] == []

    @pytest.mark.asyncio
    async def test_updates_plurals_and_detector(self):
        detector = MagicMock()
        translator = Translator(
            TranslatorConfig(translations={"ru": {"x": "y"}}), detector=detector
        )

        await translator.set_locale("ru")

        assert translator.plurals.locale == "ru"
        detector.set_locale.assert_called_once_with("ru")

    @pytest.mark.asyncio
    async def test_failing_listener_does_not_break_switch(self, translator):
        def broken(event):
            raise RuntimeError("listener failure")

        received = []
        translator.on(TranslatorEvent.LOCALE_CHANGED, broken)
        translator.on(TranslatorEvent.LOCALE_CHANGED, received.append)

        await translator.set_locale("fr")

        assert translator.get_locale() == "fr"
        assert len(received) == 1
