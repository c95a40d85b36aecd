"""Tests for the MML -> tone sequence parser."""

from array import array

import pytest

from mml2smf.domain import tone_control as tc
from mml2smf.domain.cursor import Position
from mml2smf.domain.errors import ErrorKind, MMLError
from mml2smf.domain.parser import MMLParser

# VERSION 1 TEMPO 120>>2 RESOLUTION 64
DEFAULT_HEADER = [tc.VERSION, 1, tc.TEMPO, 30, tc.RESOLUTION, 64]


def parse(text: str) -> list[int]:
    return list(array('b', MMLParser().parse(text)))


def body(text: str) -> list[int]:
    """Sequência sem o cabeçalho de 6 bytes."""
    return parse(text)[tc.HEADER_SIZE :]


def parse_error(text: str) -> MMLError:
    with pytest.raises(MMLError) as exc_info:
        MMLParser().parse(text)
    return exc_info.value


# ── header ──────────────────────────────────────────────────────────


class TestHeader:
    def test_default_header(self):
        assert parse('C')[: tc.HEADER_SIZE] == DEFAULT_HEADER

    def test_tempo_and_resolution(self):
        assert parse('T150%96 C') == [
            tc.VERSION, 1, tc.TEMPO, 37, tc.RESOLUTION, 96, 60, 24,
        ]

    def test_lowercase_tempo(self):
        assert parse('t200C')[3] == 50

    @pytest.mark.parametrize('tempo', [20, 508])
    def test_tempo_limits_accepted(self, tempo):
        assert parse(f'T{tempo} C')[3] == tempo >> 2

    @pytest.mark.parametrize(
        ('text', 'column'),
        [('T19 C', 4), ('T509 C', 5), ('T C', 2)],
    )
    def test_tempo_out_of_range(self, text, column):
        error = parse_error(text)
        assert error.kind == ErrorKind.INVALID_TEMPO
        assert error.position == Position(character=' ', column=column, row=1)

    def test_tempo_overflow_points_at_unconsumed_digit(self):
        error = parse_error('T99999C')
        assert error.kind == ErrorKind.INVALID_TEMPO
        assert error.position == Position(character='9', column=5, row=1)

    @pytest.mark.parametrize('resolution', [1, 127])
    def test_resolution_limits_accepted(self, resolution):
        assert parse(f'%{resolution} C')[5] == resolution

    @pytest.mark.parametrize('resolution', [0, 128])
    def test_resolution_out_of_range(self, resolution):
        assert parse_error(f'%{resolution} C').kind == ErrorKind.INVALID_RESOLUTION

    def test_resolution_sets_default_duration(self):
        assert body('%1 C') == [60, 1]
        assert body('%127 C') == [60, 31]

    def test_tempo_after_resolution_is_not_a_directive(self):
        assert parse_error('%32 T120 C').kind == ErrorKind.UNEXPECTED_REMAINS


# ── notes, rests, lengths ───────────────────────────────────────────


class TestNotes:
    def test_scale(self):
        assert body('CDEFGAB')[::2] == [60, 62, 64, 65, 67, 69, 71]

    def test_lowercase_notes(self):
        assert body('cdefgab')[::2] == [60, 62, 64, 65, 67, 69, 71]

    def test_accidentals(self):
        assert body('C+ C# D-')[::2] == [61, 61, 61]

    def test_default_duration(self):
        assert body('C') == [60, 16]

    def test_rest(self):
        assert body('R') == [tc.SILENCE, 16]

    def test_rest_with_accidental(self):
        error = parse_error('R#')
        assert error.kind == ErrorKind.INVALID_REST
        assert error.position.column == 2

    def test_note_above_range(self):
        error = parse_error('O9B')
        assert error.kind == ErrorKind.INVALID_NOTE

    def test_flat_below_range(self):
        error = parse_error('O0>C-')
        assert error.kind == ErrorKind.INVALID_NOTE

    def test_lowest_note(self):
        assert body('O0>C') == [0, 16]


class TestLengths:
    @pytest.mark.parametrize(
        ('text', 'ticks'),
        [
            ('C1', 64),
            ('C4', 16),
            ('C8', 8),
            ('C64', 1),
            ('C4.', 24),
            ('C4..', 28),
            ('C1......', 127),
            ('C(100)', 100),
            ('C(1)', 1),
        ],
    )
    def test_duration_literal(self, text, ticks):
        assert body(text) == [60, ticks]

    def test_short_note_never_drops_to_zero(self):
        assert body('%2 C2.') == [60, 2]

    @pytest.mark.parametrize(
        'text', ['C0', 'C65', 'C(0)', 'C(128)', 'C(12', 'C1.......']
    )
    def test_invalid_duration(self, text):
        assert parse_error(text).kind == ErrorKind.INVALID_LENGTH

    def test_default_length(self):
        assert body('L8 C R') == [60, 8, tc.SILENCE, 8]

    def test_raw_default_length(self):
        assert body('l(5)r') == [tc.SILENCE, 5]

    def test_length_without_literal_keeps_default(self):
        assert body('L8 L C') == [60, 8]


# ── octaves ─────────────────────────────────────────────────────────


class TestOctaves:
    def test_absolute_octave(self):
        assert body('O5C O0C O4C')[::2] == [72, 12, 60]

    def test_shift_operators(self):
        # `<` sobe e `>` desce
        assert body('<C >>C')[::2] == [72, 48]

    def test_missing_octave_number(self):
        assert parse_error('OC').kind == ErrorKind.INVALID_OCTAVE

    def test_octave_value_out_of_range(self):
        assert parse_error('O10C').kind == ErrorKind.INVALID_OCTAVE_VALUE

    def test_increase_out_of_range(self):
        error = parse_error('O9 <')
        assert error.kind == ErrorKind.INVALID_INCREASE_OCTAVE
        assert error.position == Position(character='<', column=4, row=1)

    def test_decrease_out_of_range(self):
        assert parse_error('O0>>').kind == ErrorKind.INVALID_DECREASE_OCTAVE


# ── volume ──────────────────────────────────────────────────────────


class TestVolume:
    def test_set_volume(self):
        assert body('V50C') == [tc.SET_VOLUME, 50, 60, 16]

    @pytest.mark.parametrize('text', ['V0C', 'V100C'])
    def test_volume_limits(self, text):
        assert body(text)[0] == tc.SET_VOLUME

    @pytest.mark.parametrize('text', ['V101', 'V', 'VC'])
    def test_invalid_volume(self, text):
        assert parse_error(text).kind == ErrorKind.INVALID_VOLUME


# ── blocks ──────────────────────────────────────────────────────────


class TestBlocks:
    def test_block_and_play(self):
        assert body('{0 C}$0') == [
            tc.BLOCK_START, 0, 60, 16, tc.BLOCK_END, 0, tc.PLAY_BLOCK, 0,
        ]

    def test_nested_play(self):
        assert body('{0C}{1$0D}$1') == [
            tc.BLOCK_START, 0, 60, 16, tc.BLOCK_END, 0,
            tc.BLOCK_START, 1, tc.PLAY_BLOCK, 0, 62, 16, tc.BLOCK_END, 1,
            tc.PLAY_BLOCK, 1,
        ]

    def test_ids_must_follow_counter(self):
        assert parse_error('{1 C} C').kind == ErrorKind.INVALID_BLOCK_ID
        assert parse_error('{0 C}{0 D} C').kind == ErrorKind.INVALID_BLOCK_ID

    def test_missing_block_id(self):
        assert parse_error('{C} C').kind == ErrorKind.INVALID_BLOCK_ID

    def test_block_ids_up_to_127(self):
        text = ''.join(f'{{{i} C}}' for i in range(128)) + '$127'
        assert body(text)[-2:] == [tc.PLAY_BLOCK, 127]

    def test_block_id_128_rejected(self):
        text = ''.join(f'{{{i} C}}' for i in range(129)) + 'C'
        assert parse_error(text).kind == ErrorKind.INVALID_BLOCK_ID

    def test_self_reference_rejected(self):
        assert parse_error('{0 C $0} C').kind == ErrorKind.INVALID_PLAY_BLOCK_ID

    def test_forward_reference_rejected(self):
        assert parse_error('{0 $1}{1 C} C').kind == ErrorKind.INVALID_PLAY_BLOCK_ID

    def test_play_without_blocks(self):
        assert parse_error('$0').kind == ErrorKind.INVALID_PLAY_BLOCK_ID
        assert parse_error('{0 C}$').kind == ErrorKind.INVALID_PLAY_BLOCK_ID

    def test_unexpected_character_in_block(self):
        error = parse_error('{0 BADCHAR}')
        assert error.kind == ErrorKind.UNEXPECTED_CHARACTER
        assert error.position == Position(character='H', column=8, row=1)

    def test_unterminated_block(self):
        assert parse_error('{0 C D').kind == ErrorKind.UNTERMINATED_BLOCK

    def test_empty_block_is_accepted(self):
        assert body('{0}$0 C') == [
            tc.BLOCK_START, 0, tc.BLOCK_END, 0, tc.PLAY_BLOCK, 0, 60, 16,
        ]

    def test_state_carries_over_from_block_definition(self):
        assert body('{0 O5 L8} C') == [
            tc.BLOCK_START, 0, tc.BLOCK_END, 0, 72, 8,
        ]

    def test_block_after_root_is_remains(self):
        assert parse_error('C {0 D}').kind == ErrorKind.UNEXPECTED_REMAINS


# ── repeats ─────────────────────────────────────────────────────────


class TestRepeats:
    def test_single_note_is_folded(self):
        assert body('[3 C]') == [tc.REPEAT, 3, 60, 16]

    def test_single_rest_is_folded(self):
        assert body('[2 R8]') == [tc.REPEAT, 2, tc.SILENCE, 8]

    def test_length_change_does_not_prevent_folding(self):
        assert body('[3 L8 C]') == [tc.REPEAT, 3, 60, 8]

    def test_two_events_are_copied(self):
        assert body('[3 C D]') == [60, 16, 62, 16] * 3

    def test_volume_prevents_folding(self):
        assert body('[2 V50 C]') == [tc.SET_VOLUME, 50, 60, 16] * 2

    def test_play_block_is_copied(self):
        assert body('{0 C}[2 $0]')[6:] == [tc.PLAY_BLOCK, 0] * 2

    def test_nested_repeat(self):
        assert body('[2 [3 C]]') == [tc.REPEAT, 3, 60, 16] * 2

    def test_state_changes_apply_once(self):
        # `>` é analisado uma vez; a cópia repete apenas os bytes
        assert body('[2 C > C]') == [60, 16, 48, 16] * 2

    @pytest.mark.parametrize('text', ['[1 C]', '[128 C]', '[C]'])
    def test_invalid_multiplier(self, text):
        assert parse_error(text).kind == ErrorKind.INVALID_REPEAT_NUMBER

    def test_multiplier_127(self):
        assert body('[127 C]') == [tc.REPEAT, 127, 60, 16]

    @pytest.mark.parametrize('text', ['[2]', '[2 O5]', '[2 L8 ]'])
    def test_body_without_events(self, text):
        assert parse_error(text).kind == ErrorKind.INVALID_REPEAT

    @pytest.mark.parametrize('text', ['[2 C', '[2 C}', '[2 C X]'])
    def test_missing_repeat_end(self, text):
        assert parse_error(text).kind == ErrorKind.INVALID_REPEAT_END


# ── root sequence ───────────────────────────────────────────────────


class TestRoot:
    @pytest.mark.parametrize('text', ['', '   \n\t '])
    def test_empty_input(self, text):
        assert parse_error(text).kind == ErrorKind.EMPTY_SEQUENCE

    def test_only_blocks(self):
        assert parse_error('{0 C}').kind == ErrorKind.EMPTY_SEQUENCE

    def test_trailing_garbage(self):
        error = parse_error('C\n  X')
        assert error.kind == ErrorKind.UNEXPECTED_REMAINS
        assert error.position == Position(character='X', column=3, row=2)

    def test_stray_closing_bracket(self):
        assert parse_error('C ]').kind == ErrorKind.UNEXPECTED_REMAINS

    def test_settings_only_root_is_not_empty(self):
        assert body('O5 L8') == []

    def test_song(self):
        assert parse('T150%96{0GFGF2.}O5[2C>AR]$0') == (
            [tc.VERSION, 1, tc.TEMPO, 37, tc.RESOLUTION, 96]
            + [tc.BLOCK_START, 0, 67, 24, 65, 24, 67, 24, 65, 72, tc.BLOCK_END, 0]
            + [72, 24, 69, 24, tc.SILENCE, 24] * 2
            + [tc.PLAY_BLOCK, 0]
        )

    def test_parse_is_repeatable(self):
        text = '{0 O5 L4 D C > B R}$0[2 C]'
        assert MMLParser().parse(text) == MMLParser().parse(text)
