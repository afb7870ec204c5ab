"""
AI Analysis Contract Tests
"""
import json

import pytest

from resume_extractor import (
    AnalysisServiceError,
    ExtractorConfig,
    InsufficientContentError,
    ensure_analyzable,
    parse_analysis_response,
    prepare_analysis_text,
)


class TestPrepareAnalysisText:

    def test_short_text_unchanged(self):
        assert prepare_analysis_text("Jane Doe") == "Jane Doe"

    def test_truncates_with_marker(self):
        config = ExtractorConfig(max_analysis_chars=20)
        prepared = prepare_analysis_text("a" * 50, config)
        assert prepared == "a" * 20 + "...[truncated]"

    def test_default_limit(self):
        prepared = prepare_analysis_text("b" * 15_001)
        assert prepared.startswith("b" * 15_000)
        assert prepared.endswith("...[truncated]")
        assert len(prepared) == 15_000 + len("...[truncated]")


class TestEnsureAnalyzable:

    def test_rejects_short_text(self):
        with pytest.raises(InsufficientContentError) as exc_info:
            ensure_analyzable("   too short for analysis   ")
        assert exc_info.value.extracted_length == len("too short for analysis")
        assert exc_info.value.to_payload()["extractedLength"] == len("too short for analysis")

    def test_accepts_long_text(self):
        text = "Senior engineer with ten years of Python and SQL experience."
        assert ensure_analyzable(text) == text


class TestParseAnalysisResponse:

    def test_fenced_json(self):
        body = {
            "score": 82,
            "atsScore": 74.6,
            "strengths": ["Clear impact statements", "Relevant stack"],
            "improvements": ["Add metrics"],
            "keywords": ["python", "etl"],
            "suggestions": ["Lead with a summary"],
            "rewrittenResume": "# Jane Doe",
            "coverLetter": "Dear hiring manager,",
        }
        analysis = parse_analysis_response("```json\n" + json.dumps(body) + "\n```")

        assert analysis.score == 82
        assert analysis.ats_score == 75
        assert analysis.strengths == ["Clear impact statements", "Relevant stack"]
        assert analysis.to_dict()["rewrittenResume"] == "# Jane Doe"

    def test_defaults_and_clamping(self):
        analysis = parse_analysis_response('{"score": 140, "atsScore": "n/a", "keywords": "python"}')

        assert analysis.score == 100
        assert analysis.ats_score == 0
        assert analysis.strengths == ["Analysis pending"]
        assert analysis.keywords == []
        assert analysis.rewritten_resume == "Enhanced resume will be generated"
        assert analysis.cover_letter == "Cover letter will be generated"

    def test_list_entries_must_be_scalar(self):
        analysis = parse_analysis_response(
            '{"strengths": [null, "Python", {"a": 1}, ["nested"], true, 3, "  "],'
            ' "keywords": [null]}'
        )
        assert analysis.strengths == ["Python", "3"]
        assert analysis.keywords == []

    @pytest.mark.parametrize("raw", ["not json at all", "[1, 2, 3]", ""])
    def test_malformed(self, raw):
        with pytest.raises(AnalysisServiceError) as exc_info:
            parse_analysis_response(raw)
        assert exc_info.value.status_code == 503
