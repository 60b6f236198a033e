"""Unit tests for slug normalization, validation and per-user uniqueness."""

import re
import unittest

from domain.model.errors import InvalidSlugError, SlugSpaceExhaustedError
from domain.model.slug import (
    FALLBACK_SLUG,
    is_valid_slug,
    normalize_slug,
    resolve_unique_slug,
    validate_slug,
)

SLUG_RE = re.compile(r'^[a-zA-Z0-9-]+$')


class TestNormalizeSlug(unittest.TestCase):

    def test_absent_name_falls_back_to_site(self):
        self.assertEqual(normalize_slug(None), FALLBACK_SLUG)
        self.assertEqual(normalize_slug(''), 'site')

    def test_lowercases_and_hyphenates(self):
        self.assertEqual(normalize_slug('My Cool Page'), 'my-cool-page')

    def test_collapses_runs_and_strips_edges(self):
        self.assertEqual(normalize_slug('  --Hello,   World!!  '), 'hello-world')
        self.assertEqual(normalize_slug('a__b..c'), 'a-b-c')

    def test_non_ascii_letters_become_separators(self):
        self.assertEqual(normalize_slug('Café Olé 2024'), 'caf-ol-2024')

    def test_name_that_strips_to_nothing_is_invalid(self):
        with self.assertRaises(InvalidSlugError):
            normalize_slug('!!!')

    def test_too_short_after_normalization_is_invalid(self):
        with self.assertRaises(InvalidSlugError):
            normalize_slug('A!')

    def test_too_long_is_invalid(self):
        with self.assertRaises(InvalidSlugError):
            normalize_slug('x' * 64)
        self.assertEqual(normalize_slug('x' * 63), 'x' * 63)

    def test_outputs_always_satisfy_grammar(self):
        names = ['Portfolio', 'my   business site', '__init__ page', 'Über 9000', 'a-b', '2024 Report (final)']
        for name in names:
            slug = normalize_slug(name)
            self.assertRegex(slug, SLUG_RE)
            self.assertTrue(3 <= len(slug) <= 63, slug)
            self.assertFalse(slug.startswith('-') or slug.endswith('-'), slug)


class TestValidateSlug(unittest.TestCase):

    def test_accepts_mixed_case_letters_digits_hyphens(self):
        self.assertEqual(validate_slug('My-Page-2'), 'My-Page-2')

    def test_rejects_two_characters(self):
        with self.assertRaises(InvalidSlugError) as ctx:
            validate_slug('Ab')
        self.assertEqual(ctx.exception.slug, 'Ab')

    def test_rejects_bad_characters_and_edges(self):
        for slug in ['has space', 'under_score', '-lead', 'trail-', 'dot.ted', '', None]:
            self.assertFalse(is_valid_slug(slug), slug)


class TestResolveUniqueSlug(unittest.TestCase):

    def test_free_candidate_is_returned_unchanged(self):
        self.assertEqual(resolve_unique_slug('test', {'other'}), 'test')

    def test_taken_candidate_gets_lowest_free_suffix(self):
        self.assertEqual(resolve_unique_slug('test', {'test'}), 'test-1')
        self.assertEqual(resolve_unique_slug('test', {'test', 'test-1', 'test-2'}), 'test-3')

    def test_gap_in_suffixes_is_reused(self):
        self.assertEqual(resolve_unique_slug('test', {'test', 'test-2'}), 'test-1')

    def test_suffix_grows_from_base_candidate(self):
        existing = {'test', 'test-1'}
        self.assertEqual(resolve_unique_slug('test', existing), 'test-2')
        self.assertNotEqual(resolve_unique_slug('test', existing), 'test-1-1')

    def test_result_never_in_existing_and_is_deterministic(self):
        existing = {'blog'} | {f'blog-{i}' for i in range(1, 50)}
        first = resolve_unique_slug('blog', existing)
        self.assertNotIn(first, existing)
        self.assertEqual(first, resolve_unique_slug('blog', existing))
        self.assertEqual(first, 'blog-50')

    def test_cap_raises_when_exhausted(self):
        existing = {'blog', 'blog-1', 'blog-2'}
        with self.assertRaises(SlugSpaceExhaustedError):
            resolve_unique_slug('blog', existing, max_attempts=2)
        self.assertEqual(resolve_unique_slug('blog', existing, max_attempts=3), 'blog-3')

    def test_long_base_is_trimmed_to_fit_suffix(self):
        base = 'a' * 63
        slug = resolve_unique_slug(base, {base})
        self.assertEqual(slug, 'a' * 61 + '-1')
        self.assertTrue(is_valid_slug(slug))

    def test_trimmed_base_drops_trailing_hyphen(self):
        base = 'a' * 60 + '-bc'
        slug = resolve_unique_slug(base, {base})
        self.assertEqual(slug, 'a' * 60 + '-1')
        self.assertTrue(is_valid_slug(slug))

    def test_trimmed_slugs_stay_distinct(self):
        base = 'b' * 63
        existing = {base, 'b' * 61 + '-1'}
        slug = resolve_unique_slug(base, existing)
        self.assertEqual(slug, 'b' * 61 + '-2')
        self.assertNotIn(slug, existing)


if __name__ == '__main__':
    unittest.main()
