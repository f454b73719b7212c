import math
import unittest

from umbrel_gen import text_utils


class TextUtilsTests(unittest.TestCase):
    def test_strip_quotes_removes_edge_quotes_only(self):
        self.assertEqual(text_utils.strip_quotes('"KEY=value"'), "KEY=value")
        self.assertEqual(text_utils.strip_quotes("'a'b'"), "a'b")
        self.assertEqual(text_utils.strip_quotes("plain"), "plain")

    def test_clean_env_key(self):
        self.assertEqual(text_utils.clean_env_key(' "MY KEY" '), "MYKEY")

    def test_split_env_text_keeps_blank_lines(self):
        self.assertEqual(
            text_utils.split_env_text('A=1\r\n"B=2"\n\nC=3'),
            ["A=1", "B=2", "", "C=3"],
        )

    def test_split_csv(self):
        self.assertEqual(text_utils.split_csv("bitcoin, lightning"), ["bitcoin", "lightning"])
        self.assertEqual(text_utils.split_csv(" , "), [])
        self.assertEqual(text_utils.split_csv(None), [])

    def test_numbered_gallery(self):
        self.assertEqual(text_utils.numbered_gallery(2), ["1.jpg", "2.jpg"])
        self.assertEqual(text_utils.numbered_gallery(0), [])

    def test_coerce_port(self):
        self.assertEqual(text_utils.coerce_port(" 8080 "), 8080)
        self.assertEqual(text_utils.coerce_port("80.0"), 80)
        self.assertEqual(text_utils.coerce_port("80.5"), 80.5)
        self.assertTrue(math.isnan(text_utils.coerce_port("eighty")))
        self.assertEqual(text_utils.coerce_port("  "), 0)
        self.assertTrue(math.isnan(text_utils.coerce_port("1_000")))

    def test_fold_lines(self):
        self.assertEqual(
            text_utils.fold_lines("  Intro  \n\n- one\n-two\nend"),
            ["Intro", "", "", "  - one", "  -two", "end"],
        )
        self.assertEqual(text_utils.fold_lines("a\u2028b\r\nc\x85d"), ["a", "b", "c", "d"])

    def test_volume_warnings(self):
        volumes = ["${APP_DATA_DIR}/data:/data", "${UMBREL_ROOT}/x:/x", "/host:/container", ""]
        self.assertEqual(text_utils.volume_warnings(volumes), ["/host:/container"])


if __name__ == "__main__":
    unittest.main()
