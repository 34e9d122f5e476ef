"""Tests for quotation detection and rendering."""

from transcript_dictate.quotations import (
    QuoteCandidate,
    adjusted_quote_start,
    detect_quotations,
    find_quote_candidates,
    quote_end,
    quote_score,
    should_break_at_conjunction,
    speech_introducer_length,
)


class TestIntroducers:
    """Test recognition of speech introducers."""

    def test_speech_verb_has_length_one(self):
        assert speech_introducer_length(["she", "asked", "why"], 1) == 1

    def test_be_verb_like_has_length_two(self):
        assert speech_introducer_length(["she", "was", "like", "no"], 1) == 2

    def test_be_verb_without_like_is_not_an_introducer(self):
        assert speech_introducer_length(["she", "was", "tired"], 1) == 0

    def test_introducer_ignores_case_and_punctuation(self):
        assert speech_introducer_length(["He", "SAID:"], 1) == 1

    def test_index_past_end(self):
        assert speech_introducer_length(["said"], 3) == 0


class TestQuoteStart:
    """Test skipping recipients after the introducer."""

    def test_skips_to_recipient(self):
        assert adjusted_quote_start(["told", "to", "him", "go"], 1) == 3

    def test_skips_bare_recipient(self):
        assert adjusted_quote_start(["told", "me", "go"], 1) == 2

    def test_plain_start_is_unchanged(self):
        assert adjusted_quote_start(["said", "go", "home"], 1) == 1

    def test_to_without_recipient_is_unchanged(self):
        assert adjusted_quote_start(["said", "to", "go"], 1) == 1


class TestQuoteEnd:
    """Test span boundary detection."""

    def test_sentence_ending_closes_span(self):
        tokens = ["said", "are", "you", "okay?", "i", "nodded"]
        assert quote_end(tokens, 1) == 4

    def test_next_introducer_closes_span(self):
        tokens = ["said", "fine", "she", "said", "ok"]
        assert quote_end(tokens, 1) == 3

    def test_discourse_boundary_closes_span(self):
        tokens = ["said", "i", "left", "because", "i", "was", "tired"]
        assert quote_end(tokens, 1) == 3

    def test_conjunction_before_subject_closes_span(self):
        tokens = ["said", "come", "here", "and", "she", "left"]
        assert quote_end(tokens, 1) == 3

    def test_conjunction_inside_quote_does_not_close_span(self):
        tokens = ["said", "bread", "and", "butter", "please"]
        assert quote_end(tokens, 1) == 5

    def test_window_is_capped(self):
        tokens = ["said"] + [f"w{n}" for n in range(30)]
        assert quote_end(tokens, 1) == 19

    def test_first_token_is_never_a_boundary(self):
        tokens = ["said", "because", "it", "rained"]
        assert quote_end(tokens, 1) == 4


class TestConjunctionLookahead:
    """Test new-clause detection after a conjunction."""

    def test_subject_follows(self):
        assert should_break_at_conjunction(["and", "we", "ran"], 0) is True

    def test_introducer_follows(self):
        assert should_break_at_conjunction(["but", "said", "nothing"], 0) is True

    def test_object_follows(self):
        assert should_break_at_conjunction(["and", "butter"], 0) is False

    def test_conjunction_at_end(self):
        assert should_break_at_conjunction(["and"], 0) is False


class TestQuoteScore:
    """Test candidate scoring."""

    def test_short_span_with_pronoun(self):
        tokens = ["i", "am", "going", "home"]
        assert quote_score(tokens, 0, 4) == 3

    def test_imperative_and_interjection(self):
        tokens = ["wait", "for", "it"]
        # short (+2), interjection (+1), imperative (+2)
        assert quote_score(tokens, 0, 3) == 5

    def test_indirect_opener_is_penalized(self):
        tokens = ["that", "is", "fine"]
        assert quote_score(tokens, 0, 3) == -2

    def test_discourse_word_is_penalized(self):
        tokens = ["because", "it", "rained"]
        assert quote_score(tokens, 0, 3) == 1

    def test_medium_span(self):
        tokens = [f"w{n}" for n in range(14)]
        assert quote_score(tokens, 0, 14) == 1

    def test_long_span(self):
        tokens = [f"w{n}" for n in range(20)]
        assert quote_score(tokens, 0, 20) == -2

    def test_span_without_words(self):
        assert quote_score(["...", "--"], 0, 2) is None


class TestFindCandidates:
    """Test the left-to-right candidate scan."""

    def test_single_candidate(self):
        tokens = "he said i am going home".split(" ")
        assert find_quote_candidates(tokens) == [QuoteCandidate(introducer_end=1, start=2, end=6)]

    def test_two_candidates_do_not_overlap(self):
        tokens = "he said come here and she said no".split(" ")
        assert find_quote_candidates(tokens) == [
            QuoteCandidate(introducer_end=1, start=2, end=4),
            QuoteCandidate(introducer_end=6, start=7, end=8),
        ]

    def test_rejection_resumes_inside_the_rejected_span(self):
        tokens = "he said because she said go".split(" ")
        assert find_quote_candidates(tokens) == [QuoteCandidate(introducer_end=4, start=5, end=6)]

    def test_introducer_at_end_has_no_candidate(self):
        assert find_quote_candidates("that is what she said".split(" ")) == []


class TestDetectQuotations:
    """Test end-to-end quotation insertion."""

    def test_basic_quotation(self):
        assert detect_quotations("he said i am going home") == 'he said, "i am going home."'

    def test_was_like_introducer(self):
        assert detect_quotations("she was like oh my god") == 'she was like, "oh my god."'

    def test_existing_intro_punctuation_is_kept(self):
        assert detect_quotations("he said: go home now") == 'he said: "go home now."'

    def test_recipient_is_skipped(self):
        result = detect_quotations("he told me stop it then she left")
        assert result == 'he told, me "stop it," then she left'

    def test_question_keeps_its_mark(self):
        result = detect_quotations("she asked are you okay? i said yes")
        assert result == 'she asked, "are you okay?" i said, "yes."'

    def test_multiple_quotations(self):
        result = detect_quotations("he said come here and she said no")
        assert result == 'he said, "come here," and she said, "no."'

    def test_discourse_boundary_ends_quote(self):
        result = detect_quotations("he said i left because i was tired")
        assert result == 'he said, "i left," because i was tired'

    def test_indirect_speech_is_unchanged(self):
        text = "he said that he was tired"
        assert detect_quotations(text) == text

    def test_low_score_is_unchanged(self):
        text = "he said because it rained"
        assert detect_quotations(text) == text

    def test_medium_span_without_speech_cues_is_unchanged(self):
        text = (
            "he said the weather report for the northern coast looks rather grim "
            "this coming weekend apparently"
        )
        assert detect_quotations(text) == text

    def test_rejected_span_retries_later_introducer(self):
        result = detect_quotations("he said because she said go")
        assert result == 'he said because she said, "go."'

    def test_indirect_speech_then_direct_quote(self):
        result = detect_quotations("he said that she said hi there")
        assert result == 'he said that she said, "hi there."'

    def test_existing_quote_is_unchanged(self):
        text = 'he said "hello there" to me'
        assert detect_quotations(text) == text

    def test_window_cap_closes_with_comma(self):
        words = " ".join(f"w{n}" for n in range(1, 20))
        result = detect_quotations(f"he said i {words}")
        assert result.startswith('he said, "i w1 ')
        assert result.endswith('w17," w18 w19')

    def test_whitespace_is_normalized(self):
        assert detect_quotations("  he   said  hi  ") == 'he said, "hi."'

    def test_whitespace_is_normalized_without_candidates(self):
        assert detect_quotations("the   cat  sat") == "the cat sat"

    def test_short_input_is_only_compacted(self):
        assert detect_quotations(" said   hello ") == "said hello"

    def test_blank_input_is_returned_as_is(self):
        assert detect_quotations("") == ""
        assert detect_quotations("   ") == "   "

    def test_non_ascii_text_passes_through(self):
        text = "él dijo que sí"
        assert detect_quotations(text) == text
