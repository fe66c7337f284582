"""
Attribute splitter tests

Tests quote protection, delimiter stripping, splitting and decoding.
"""

from slickcode.lib.attributes import call_split, quotes_protect


class TestNameExtraction:
    """Handler name is the first segment"""

    def test_name_only(self):
        """Token without colons has no attributes"""
        call = call_split("%%siteurl%%")
        assert call.name == "siteurl"
        assert call.attrs == []

    def test_name_and_attributes(self):
        """Colon-separated attributes in order"""
        call = call_split("%%date:Y-m-d:post_date%%")
        assert call.name == "date"
        assert call.attrs == ["Y-m-d", "post_date"]

    def test_empty_attribute_kept(self):
        """Empty segments stay as empty strings"""
        call = call_split("%%date::post_date%%")
        assert call.attrs == ["", "post_date"]

    def test_trailing_colon(self):
        """A trailing colon gives an empty last attribute"""
        assert call_split("%%date:Y:%%").attrs == ["Y", ""]


class TestQuoteProtection:
    """Quoted attributes keep their colons"""

    def test_quoted_colons_not_split(self):
        """Double-quoted time format is one attribute"""
        call = call_split('%%date:"H:i:s":now%%')
        assert call.name == "date"
        assert call.attrs == ["H:i:s", "now"]

    def test_single_quotes(self):
        """Single quotes protect colons and keep inner double quotes"""
        call = call_split("%%date:'H:\"i\":s'%%")
        assert call.attrs == ['H:"i":s']

    def test_quotes_without_colons_stripped(self):
        """Quotes are stripped even when there is nothing to protect"""
        assert call_split('%%date:"Y-m-d"%%').attrs == ["Y-m-d"]

    def test_doubled_quotes_keep_one_pair(self):
        """Only one quote is trimmed from each end"""
        assert call_split('%%date:""Y-m-d""%%').attrs == ['"Y-m-d"']

    def test_inner_quotes_preserved(self):
        """Quotes inside the outer pair are literal"""
        assert call_split('%%date:""Y"-m-d"%%').attrs == ['"Y"-m-d']

    def test_partial_quotes_untouched(self):
        """Quotes not spanning the whole segment are literal"""
        assert call_split('%%date:"Y"-m-d%%').attrs == ['"Y"-m-d']

    def test_leading_quotes_only_untouched(self):
        """Unclosed quotes are literal"""
        assert call_split('%%date:""Y-m-d%%').attrs == ['""Y-m-d']

    def test_unbalanced_quote_splits_normally(self):
        """Without a closing quote the colons still split"""
        assert call_split('%%date:"H:i:s%%').attrs == ['"H', "i", "s"]

    def test_quoted_name(self):
        """A quoted segment right after %% is protected too"""
        assert call_split('%%"a:b"%%').name == "a:b"

    def test_protect_replaces_colons_with_entity(self):
        """quotes_protect escapes colons and drops the outer quotes"""
        assert quotes_protect('%%date:"H:i:s":now%%') == "%%date:H&#58;i&#58;s:now%%"

    def test_protect_leaves_plain_tokens(self):
        """Tokens without quotes are unchanged"""
        assert quotes_protect("%%date:Y-m-d%%") == "%%date:Y-m-d%%"


class TestDecoding:
    """Attributes are URL-decoded after splitting"""

    def test_percent_encoded_space(self):
        """%20 becomes a space"""
        call = call_split("%%days:jS F%20Y:1495678388%%")
        assert call.attrs == ["jS F Y", "1495678388"]

    def test_plus_is_space(self):
        """+ becomes a space"""
        assert call_split("%%date:j+F%%").attrs == ["j F"]

    def test_percent_encoded_colon(self):
        """%3A gives a literal colon without splitting"""
        assert call_split("%%date:H%3Ai%%").attrs == ["H:i"]

    def test_percent_encoded_quote(self):
        """%22 inside a quoted segment is decoded after unwrapping"""
        assert call_split("%%date:\"H:i%22:s\"%%").attrs == ['H:i":s']

    def test_name_decoded(self):
        """The name is decoded as well"""
        assert call_split("%%my%20tag%%").name == "my tag"
