import unittest

from aitaskmanager.core.records.frontmatter import extract_id, parse_header, split_value_and_comment


class FrontMatterParseTests(unittest.TestCase):
    def test_parses_fields_and_body(self) -> None:
        text = "---\nid: 5\ntitle: 'Hello world'\ncreated: 2025-01-01\n---\n# Plan\n\nBody text\n"

        result = parse_header(text)

        self.assertTrue(result.has_header)
        self.assertEqual(result.fields, {"id": "5", "title": "Hello world", "created": "2025-01-01"})
        self.assertEqual(result.body, "# Plan\n\nBody text\n")

    def test_document_without_header_returns_full_body(self) -> None:
        text = "# Just a heading\n\nid: 4\n"

        result = parse_header(text)

        self.assertFalse(result.has_header)
        self.assertEqual(result.fields, {})
        self.assertEqual(result.body, text)

    def test_unterminated_header_yields_no_fields(self) -> None:
        text = "---\nid: 5\ntitle: never closed\n"

        result = parse_header(text)

        self.assertEqual(result.fields, {})
        self.assertEqual(result.body, text)

    def test_start_delimiter_must_be_first_non_blank_line(self) -> None:
        self.assertEqual(parse_header("\n\n---\nid: 2\n---\n").get("id"), "2")
        self.assertEqual(parse_header("intro\n---\nid: 2\n---\n").fields, {})

    def test_byte_order_mark_is_tolerated(self) -> None:
        result = parse_header("\ufeff---\nid: 9\n---\nbody\n")

        self.assertEqual(result.get("id"), "9")

    def test_skips_comments_blank_lines_and_lines_without_separator(self) -> None:
        text = "---\n# leading comment\n\njust some words\nid: 3\n  # indented comment\nstatus: pending\n---\n"

        result = parse_header(text)

        self.assertEqual(result.fields, {"id": "3", "status": "pending"})

    def test_quoted_keys_and_inline_comments(self) -> None:
        text = (
            "---\n"
            '"id": 12  # assigned by allocator\n'
            "'approval_method': \"manual\" # keep\n"
            'note: "a # inside quotes"\n'
            "---\n"
        )

        result = parse_header(text)

        self.assertEqual(result.get("id"), "12")
        self.assertEqual(result.get("approval_method"), "manual")
        self.assertEqual(result.get("note"), "a # inside quotes")

    def test_value_keeps_text_after_first_colon(self) -> None:
        result = parse_header("---\nurl: https://example.com/path\n---\n")

        self.assertEqual(result.get("url"), "https://example.com/path")

    def test_duplicate_keys_keep_first_occurrence(self) -> None:
        result = parse_header("---\nid: 1\nid: 2\n---\n")

        self.assertEqual(result.get("id"), "1")

    def test_crlf_documents_are_parsed(self) -> None:
        result = parse_header("---\r\nid: 4\r\ncreated: today\r\n---\r\nbody\r\n")

        self.assertEqual(result.fields, {"id": "4", "created": "today"})
        self.assertEqual(result.body, "body\r\n")

    def test_malformed_input_never_raises(self) -> None:
        for text in ("", "---", "---\n---", "---\n:\n---\n", "\x00\x01", "---\n: value\n'': x\n---\n"):
            with self.subTest(text=text):
                result = parse_header(text)
                self.assertIsInstance(result.fields, dict)


class SplitValueAndCommentTests(unittest.TestCase):
    def test_unquoted_value_with_comment(self) -> None:
        self.assertEqual(split_value_and_comment(" manual  # chosen"), ("manual", "  # chosen"))

    def test_hash_without_leading_space_is_part_of_value(self) -> None:
        self.assertEqual(split_value_and_comment(" issue#12"), ("issue#12", ""))


class ExtractIdTests(unittest.TestCase):
    def test_numeric_values(self) -> None:
        self.assertEqual(extract_id("---\nid: 7\n---\n"), 7)
        self.assertEqual(extract_id("---\nid: 007\n---\n"), 7)
        self.assertEqual(extract_id("---\nid: +3\n---\n"), 3)
        self.assertEqual(extract_id("---\nid: \"12\"\n---\n"), 12)

    def test_unusable_values_return_none(self) -> None:
        for value in ("", "null", "~", "-1", "abc", "1.5", "NULL"):
            with self.subTest(value=value):
                self.assertIsNone(extract_id(f"---\nid: {value}\n---\n"))

    def test_missing_id_or_header_returns_none(self) -> None:
        self.assertIsNone(extract_id("---\ntitle: x\n---\n"))
        self.assertIsNone(extract_id("id: 4\n"))


if __name__ == "__main__":
    unittest.main()
