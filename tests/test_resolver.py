"""Tests for veneer.core.resolver — reference resolution, cycles, dangling paths."""

import random

import pytest
from veneer.core.color import Color
from veneer.core.document import parse_document
from veneer.core.errors import CyclicReference, DanglingReference, InvalidColorFormat
from veneer.core.resolver import LeafState, Resolver, resolve_document


def _resolve(raw, order=None):
    return resolve_document(parse_document(raw), order)


class TestResolves:
    def test_literals_become_colours(self, raw_palette):
        resolved = _resolve(raw_palette)
        assert resolved.get('colors.light.text_primary') == Color(255, 255, 255)
        assert resolved.get('colors.light.overlay') == Color(0x3F, 0xA7, 0xD6, 0x80)

    def test_dark_primary_follows_light_primary(self, raw_palette):
        resolved = _resolve(raw_palette)
        assert resolved.dark['primary'] == resolved.light['primary'] == Color.parse('#111111')

    def test_two_hop_chain(self, raw_palette):
        # accents.muted -> accents.warning -> colors.light.primary
        resolved = _resolve(raw_palette)
        assert resolved.accents['muted'] == Color.parse('#111111')

    def test_reference_across_ansi_rows(self, raw_palette):
        resolved = _resolve(raw_palette)
        assert resolved.ansi['dark']['bright']['white'] == Color(255, 255, 255)

    def test_reference_keeps_alpha(self, raw_palette):
        raw_palette['accents']['veil'] = 'colors.light.overlay'
        resolved = _resolve(raw_palette)
        assert resolved.accents['veil'].a == 0x80

    def test_every_leaf_is_a_colour(self, raw_palette):
        resolved = _resolve(raw_palette)
        items = list(resolved.items())
        assert len(items) == len(parse_document(raw_palette).leaves)
        assert all(isinstance(color, Color) for _path, color in items)

    def test_shape_matches_document(self, raw_palette):
        doc = parse_document(raw_palette)
        resolved = resolve_document(doc)
        for section, names in doc.sections.items():
            assert tuple(resolved.section(section)) == names

    def test_meta_passed_through(self, raw_palette):
        assert _resolve(raw_palette).meta.name == 'Test'

    def test_all_states_resolved_afterwards(self, raw_palette):
        doc = parse_document(raw_palette)
        resolver = Resolver(doc)
        assert resolver.state('accents.muted') is LeafState.UNVISITED
        resolver.resolve()
        assert all(resolver.state(p) is LeafState.RESOLVED for p in doc.leaves)

    def test_resolve_single_path(self, raw_palette):
        resolver = Resolver(parse_document(raw_palette))
        assert resolver.resolve_path('accents.muted') == Color.parse('#111111')
        assert resolver.state('accents.warning') is LeafState.RESOLVED
        assert resolver.state('accents.info') is LeafState.UNVISITED

    def test_unknown_path_is_key_error(self, raw_palette):
        with pytest.raises(KeyError):
            Resolver(parse_document(raw_palette)).resolve_path('accents.nope')


class TestOrderIndependence:
    def test_forward_reverse_shuffled_identical(self, raw_palette):
        doc = parse_document(raw_palette)
        paths = list(doc.paths())
        shuffled = paths[:]
        random.Random(1234).shuffle(shuffled)

        forward = resolve_document(doc, paths)
        reverse = resolve_document(doc, reversed(paths))
        mixed = resolve_document(doc, shuffled)

        assert forward == reverse == mixed
        assert forward.to_dict() == reverse.to_dict() == mixed.to_dict()

    def test_partial_order_still_resolves_everything(self, raw_palette):
        doc = parse_document(raw_palette)
        resolved = resolve_document(doc, ['accents.muted'])
        assert len(list(resolved.items())) == len(doc.leaves)

    def test_many_random_orders(self, raw_palette):
        doc = parse_document(raw_palette)
        expected = resolve_document(doc).to_dict()
        rng = random.Random(7)
        for _ in range(20):
            paths = list(doc.paths())
            rng.shuffle(paths)
            assert resolve_document(doc, paths).to_dict() == expected


class TestCycles:
    def test_self_reference(self, raw_palette):
        raw_palette['accents']['info'] = 'accents.info'
        with pytest.raises(CyclicReference) as exc_info:
            _resolve(raw_palette)
        assert exc_info.value.cycle == ('accents.info', 'accents.info')

    @pytest.mark.parametrize('start', ['accents.a', 'accents.b', 'accents.c'])
    def test_three_node_cycle_from_any_start(self, raw_palette, start):
        raw_palette['accents'].update({'a': 'accents.b', 'b': 'accents.c', 'c': 'accents.a'})
        with pytest.raises(CyclicReference) as exc_info:
            _resolve(raw_palette, [start])
        cycle = exc_info.value.cycle
        assert cycle[0] == cycle[-1] == start
        assert len(cycle) == 4
        assert set(cycle) == {'accents.a', 'accents.b', 'accents.c'}

    def test_cycle_order_follows_references(self, raw_palette):
        raw_palette['accents'].update({'a': 'accents.b', 'b': 'accents.c', 'c': 'accents.a'})
        with pytest.raises(CyclicReference) as exc_info:
            _resolve(raw_palette, ['accents.b'])
        assert exc_info.value.cycle == ('accents.b', 'accents.c', 'accents.a', 'accents.b')

    def test_cycle_reached_through_tail_excludes_tail(self, raw_palette):
        raw_palette['accents'].update({'tail': 'accents.a', 'a': 'accents.b', 'b': 'accents.a'})
        with pytest.raises(CyclicReference) as exc_info:
            _resolve(raw_palette, ['accents.tail'])
        assert exc_info.value.cycle == ('accents.a', 'accents.b', 'accents.a')

    def test_cycle_across_sections(self, raw_palette):
        raw_palette['colors']['light']['primary'] = 'ansi.light.normal.black'
        # ansi.light.normal.black already points at colors.light.primary
        with pytest.raises(CyclicReference):
            _resolve(raw_palette)

    def test_default_order_also_detects(self, raw_palette):
        raw_palette['accents']['info'] = 'accents.warning'
        raw_palette['accents']['warning'] = 'accents.info'
        with pytest.raises(CyclicReference):
            _resolve(raw_palette)


class TestDangling:
    def test_missing_path(self, raw_palette):
        raw_palette['accents']['warning'] = 'colors.light.missing'
        with pytest.raises(DanglingReference) as exc_info:
            _resolve(raw_palette)
        assert exc_info.value.path == 'accents.warning'
        assert exc_info.value.target_path == 'colors.light.missing'

    @pytest.mark.parametrize('target', ['colors.light', 'colors', 'ansi.dark', 'ansi.dark.normal'])
    def test_reference_to_section(self, raw_palette, target):
        raw_palette['accents']['warning'] = target
        with pytest.raises(DanglingReference) as exc_info:
            _resolve(raw_palette)
        assert exc_info.value.target_path == target

    def test_reference_past_a_leaf(self, raw_palette):
        raw_palette['accents']['warning'] = 'colors.light.primary.extra'
        with pytest.raises(DanglingReference):
            _resolve(raw_palette)

    def test_reference_into_meta(self, raw_palette):
        raw_palette['accents']['warning'] = 'meta.name'
        with pytest.raises(DanglingReference):
            _resolve(raw_palette)

    def test_undotted_reference(self, raw_palette):
        raw_palette['accents']['warning'] = 'primary'
        with pytest.raises(DanglingReference) as exc_info:
            _resolve(raw_palette)
        assert exc_info.value.target_path == 'primary'

    def test_dangling_at_end_of_chain_names_last_hop(self, raw_palette):
        raw_palette['colors']['light']['primary'] = 'colors.light.gone'
        with pytest.raises(DanglingReference) as exc_info:
            _resolve(raw_palette, ['accents.muted'])
        assert exc_info.value.path == 'colors.light.primary'


class TestInvalidLiteral:
    def test_bad_hex_reports_path_and_text(self, raw_palette):
        raw_palette['ansi']['light']['normal']['red'] = '#GGGGGG'
        with pytest.raises(InvalidColorFormat) as exc_info:
            _resolve(raw_palette)
        assert exc_info.value.path == 'ansi.light.normal.red'
        assert exc_info.value.text == '#GGGGGG'

    def test_short_hex(self, raw_palette):
        raw_palette['accents']['info'] = '#fff'
        with pytest.raises(InvalidColorFormat) as exc_info:
            _resolve(raw_palette)
        assert exc_info.value.path == 'accents.info'

    def test_bad_literal_reached_through_reference(self, raw_palette):
        raw_palette['colors']['light']['primary'] = '#12345'
        with pytest.raises(InvalidColorFormat) as exc_info:
            _resolve(raw_palette, ['accents.muted'])
        assert exc_info.value.path == 'colors.light.primary'


class TestFailureLeavesNoTrace:
    def test_dangling_leaf_reports_dangling_again(self, raw_palette):
        raw_palette['accents'].update({'bad': 'colors.light.gone', 'alias': 'accents.bad'})
        resolver = Resolver(parse_document(raw_palette))
        with pytest.raises(DanglingReference):
            resolver.resolve_path('accents.bad')
        assert resolver.state('accents.bad') is LeafState.UNVISITED

        with pytest.raises(DanglingReference) as exc_info:
            resolver.resolve_path('accents.alias')
        assert exc_info.value.path == 'accents.bad'
        assert resolver.state('accents.alias') is LeafState.UNVISITED

    def test_invalid_literal_resets_whole_chain(self, raw_palette):
        raw_palette['colors']['light']['primary'] = '#12345'
        resolver = Resolver(parse_document(raw_palette))
        with pytest.raises(InvalidColorFormat):
            resolver.resolve_path('accents.muted')
        for path in ('accents.muted', 'accents.warning', 'colors.light.primary'):
            assert resolver.state(path) is LeafState.UNVISITED

    def test_cycle_resets_states(self, raw_palette):
        raw_palette['accents'].update({'a': 'accents.b', 'b': 'accents.a'})
        resolver = Resolver(parse_document(raw_palette))
        with pytest.raises(CyclicReference):
            resolver.resolve_path('accents.a')
        with pytest.raises(CyclicReference) as exc_info:
            resolver.resolve_path('accents.b')
        assert exc_info.value.cycle == ('accents.b', 'accents.a', 'accents.b')

    def test_healthy_leaf_still_resolves_after_failure(self, raw_palette):
        raw_palette['accents']['bad'] = 'colors.light.gone'
        resolver = Resolver(parse_document(raw_palette))
        with pytest.raises(DanglingReference):
            resolver.resolve_path('accents.bad')
        assert resolver.resolve_path('accents.muted') == Color.parse('#111111')


class TestLongChains:
    HOPS = 2000

    def _chain_palette(self, raw_palette):
        links = {'link0': '#3FA7D6'}
        for i in range(1, self.HOPS + 1):
            links[f'link{i}'] = f'colors.light.link{i - 1}'
        raw_palette['colors']['light'].update(links)
        return raw_palette

    def test_tail_first_does_not_hit_recursion_limit(self, raw_palette):
        doc = parse_document(self._chain_palette(raw_palette))
        resolved = resolve_document(doc, reversed(list(doc.paths())))
        assert resolved.light[f'link{self.HOPS}'] == Color.parse('#3FA7D6')
        assert {resolved.light[f'link{i}'] for i in range(self.HOPS + 1)} == {Color.parse('#3FA7D6')}

    def test_single_lookup_marks_every_hop(self, raw_palette):
        resolver = Resolver(parse_document(self._chain_palette(raw_palette)))
        assert resolver.resolve_path(f'colors.light.link{self.HOPS}') == Color.parse('#3FA7D6')
        assert resolver.state('colors.light.link1000') is LeafState.RESOLVED

    def test_long_chain_ending_in_cycle(self, raw_palette):
        raw = self._chain_palette(raw_palette)
        raw['colors']['light']['link0'] = f'colors.light.link{self.HOPS}'
        with pytest.raises(CyclicReference) as exc_info:
            _resolve(raw)
        assert len(exc_info.value.cycle) == self.HOPS + 2
