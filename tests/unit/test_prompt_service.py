"""Unit tests for app.services.prompt_service — orchestration and fallbacks."""

import logging

import httpx
import pytest
import respx
from httpx import Response

from app.core.modes import ERROR_FALLBACK_MESSAGE
from app.llms.base import GenerationError
from app.schemas.request import GenerateRequest
from app.services.prompt_service import PromptGenerator, clamp_temperature
from app.services.spec_assembler import assemble
from conftest import GEMINI_URL, TEST_MODEL_ID, StubLLM


def _spec_text(mode, fields) -> str:
    request = GenerateRequest.from_payload(fields, mode=mode)
    return assemble(request.mode, request.base, request.mode_fields).spec_text


class TestNoCredential:
    @pytest.mark.asyncio
    async def test_local_fallback_without_network(self, settings_no_key, stub_llm):
        generator = PromptGenerator(settings_no_key, stub_llm)
        fields = {"goal": "Write a blog post", "audience": "", "tools": ""}
        result = await generator.generate("general", fields)
        assert result.model == "local-fallback"
        assert result.mode == "general"
        assert result.prompt.startswith("FINAL PROMPT")
        assert result.prompt == "FINAL PROMPT\n\n" + _spec_text("general", fields)
        assert "เป้าหมาย: Write a blog post" in result.prompt
        assert "กลุ่มเป้าหมาย" not in result.prompt
        assert "เครื่องมือ" not in result.prompt
        assert stub_llm.calls == []

    @pytest.mark.asyncio
    @respx.mock
    async def test_real_client_makes_no_request(self, settings_no_key):
        route = respx.post(GEMINI_URL)
        generator = PromptGenerator(settings_no_key)
        result = await generator.generate("media", {"goal": "poster"})
        await generator.close()
        assert result.model == "local-fallback"
        assert result.mode == "media"
        assert not route.called

    @pytest.mark.asyncio
    async def test_unknown_mode_resolves_to_general(self, settings_no_key, stub_llm):
        generator = PromptGenerator(settings_no_key, stub_llm)
        fields = {"goal": "g", "style": "noir"}
        video = await generator.generate("video", fields)
        general = await generator.generate("general", fields)
        assert video == general
        assert video.mode == "general"

    @pytest.mark.asyncio
    async def test_missing_mode_defaults_to_general(self, settings_no_key, stub_llm):
        generator = PromptGenerator(settings_no_key, stub_llm)
        result = await generator.generate(None, None)
        assert result.mode == "general"
        assert result.model == "local-fallback"


class TestRemoteSuccess:
    @pytest.mark.asyncio
    async def test_uses_trimmed_remote_text(self, settings_with_key):
        llm = StubLLM(answer="  FINAL PROMPT\n\nDo the thing.\n  ")
        generator = PromptGenerator(settings_with_key, llm)
        result = await generator.generate("coding", {"goal": "g", "creativity": 0.6})
        assert result.model == TEST_MODEL_ID
        assert result.prompt == "FINAL PROMPT\n\nDo the thing."
        assert result.mode == "coding"
        system_hint, user_task, temperature = llm.calls[0]
        assert "งานพัฒนาซอฟต์แวร์" in system_hint
        assert "เป้าหมาย: g" in user_task
        assert temperature == pytest.approx(0.6)

    @pytest.mark.asyncio
    async def test_remote_text_not_rewrapped(self, settings_with_key):
        llm = StubLLM(answer="Act as a travel planner.")
        generator = PromptGenerator(settings_with_key, llm)
        result = await generator.generate("general", {"goal": "trip"})
        assert result.prompt == "Act as a travel planner."

    @pytest.mark.asyncio
    @pytest.mark.parametrize("answer", ["", "   \n\t "])
    async def test_empty_text_falls_back_to_spec(self, settings_with_key, answer):
        generator = PromptGenerator(settings_with_key, StubLLM(answer=answer))
        fields = {"goal": "Write a blog post", "tone": "playful"}
        result = await generator.generate("general", fields)
        assert result.model == TEST_MODEL_ID
        assert result.prompt == "FINAL PROMPT\n\n" + _spec_text("general", fields)

    @pytest.mark.asyncio
    @respx.mock
    async def test_empty_candidates_over_http(self, settings_with_key):
        respx.post(GEMINI_URL).mock(return_value=Response(200, json={"candidates": []}))
        generator = PromptGenerator(settings_with_key)
        try:
            result = await generator.generate("media", {"goal": "poster"})
        finally:
            await generator.close()
        assert result.model == TEST_MODEL_ID
        assert result.prompt == "FINAL PROMPT\n\n" + _spec_text("media", {"goal": "poster"})

    @pytest.mark.asyncio
    @pytest.mark.parametrize("raw, expected", [(5, 2.0), (-1, 0.0), ("bad", 0.3)])
    async def test_creativity_clamped_before_call(self, settings_with_key, raw, expected):
        llm = StubLLM()
        generator = PromptGenerator(settings_with_key, llm)
        await generator.generate("general", {"goal": "g", "creativity": raw})
        assert llm.calls[0][2] == pytest.approx(expected)


class TestRemoteFailure:
    @pytest.mark.asyncio
    @respx.mock
    async def test_http_error_becomes_error_fallback(self, settings_with_key, caplog):
        route = respx.post(GEMINI_URL).mock(return_value=Response(500, text="internal"))
        generator = PromptGenerator(settings_with_key)
        with caplog.at_level(logging.ERROR, logger="prompt_builder"):
            try:
                result = await generator.generate("coding", {"goal": "g"})
            finally:
                await generator.close()
        assert route.call_count == 1
        assert result.model == "local-fallback"
        assert result.mode == "coding"
        assert result.prompt == "FINAL PROMPT\n\n" + ERROR_FALLBACK_MESSAGE
        assert any(r.getMessage() == "generation_failed" for r in caplog.records)

    @pytest.mark.asyncio
    @respx.mock
    async def test_network_error_becomes_error_fallback(self, settings_with_key):
        respx.post(GEMINI_URL).mock(side_effect=httpx.ConnectTimeout("timed out"))
        generator = PromptGenerator(settings_with_key)
        try:
            result = await generator.generate("general", {"goal": "g"})
        finally:
            await generator.close()
        assert result.model == "local-fallback"
        assert ERROR_FALLBACK_MESSAGE in result.prompt

    @pytest.mark.asyncio
    @respx.mock
    async def test_malformed_json_becomes_error_fallback(self, settings_with_key):
        respx.post(GEMINI_URL).mock(return_value=Response(200, text="<html>not json</html>"))
        generator = PromptGenerator(settings_with_key)
        try:
            result = await generator.generate("general", {"goal": "g"})
        finally:
            await generator.close()
        assert result.model == "local-fallback"
        assert ERROR_FALLBACK_MESSAGE in result.prompt

    @pytest.mark.asyncio
    async def test_any_exception_is_absorbed(self, settings_with_key):
        llm = StubLLM(error=GenerationError(429, "quota"))
        generator = PromptGenerator(settings_with_key, llm)
        result = await generator.generate("media", {"goal": "g"})
        assert result.model == "local-fallback"
        assert result.mode == "media"
        assert len(llm.calls) == 1


class TestClampTemperature:
    @pytest.mark.parametrize("value, expected", [(0.3, 0.3), (2.5, 2.0), (-0.1, 0.0)])
    def test_clamp(self, value, expected):
        assert clamp_temperature(value) == expected
