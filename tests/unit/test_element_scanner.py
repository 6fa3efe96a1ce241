"""
scanner/element_scanner.py 單元測試

驗證走訪順序、scan_index、屬性讀取與不合法根節點。
"""

from unittest.mock import MagicMock, PropertyMock
from xml.etree import ElementTree

import pytest

from core.exceptions import InvalidRootError
from scanner.element_scanner import (
    Affordances, ElementScanner, SelectorAttributes, scan, snapshot_from_driver,
)


@pytest.mark.unit
class TestTraversal:
    """走訪順序與 scan_index"""

    @pytest.mark.unit
    def test_yields_every_element_once(self, login_html):
        """n 個元素 → n 筆描述，scan_index 為 0..n-1"""
        descriptors = list(scan(login_html))
        assert len(descriptors) == 13
        assert [d.scan_index for d in descriptors] == list(range(13))

    @pytest.mark.unit
    def test_document_order_pre_order(self, login_html):
        """深度優先、前序"""
        tags = [d.tag_name for d in scan(login_html)]
        assert tags[:6] == ["html", "head", "title", "body", "form", "input"]
        assert tags[-2:] == ["p", "a"]

    @pytest.mark.unit
    def test_restartable(self, login_html):
        """同一個 scanner 可重複走訪，結果一致"""
        scanner = scan(login_html)
        assert list(scanner) == list(scanner)

    @pytest.mark.unit
    def test_reproducible_across_scans(self, login_html):
        """未變動的文件兩次掃描結果相同"""
        assert list(scan(login_html)) == list(scan(login_html))

    @pytest.mark.unit
    def test_soup_document_and_string_agree(self, login_html, login_soup):
        """HTML 字串與 BeautifulSoup 文件結果相同"""
        assert list(scan(login_soup)) == list(scan(login_html))

    @pytest.mark.unit
    def test_tag_root_includes_itself(self, login_soup):
        """傳入單一 Tag 時，根節點本身是 scan_index 0"""
        form = login_soup.find("form")
        descriptors = list(ElementScanner(form))
        assert descriptors[0].tag_name == "form"
        assert descriptors[0].attributes.id == "login-form"
        assert len(descriptors) == 7

    @pytest.mark.unit
    def test_etree_root(self):
        """xml.etree Element 也能走訪，namespace 會被去掉"""
        root = ElementTree.fromstring(
            '<html xmlns="http://www.w3.org/1999/xhtml"><body><div id="a"/></body></html>'
        )
        descriptors = list(scan(root))
        assert [d.tag_name for d in descriptors] == ["html", "body", "div"]
        assert descriptors[2].attributes.id == "a"

    @pytest.mark.unit
    def test_etree_tree_skips_comments(self):
        """ElementTree 使用 getroot()，註解節點不計入"""
        root = ElementTree.Element("div")
        root.append(ElementTree.Comment("note"))
        ElementTree.SubElement(root, "span")
        descriptors = list(scan(ElementTree.ElementTree(root)))
        assert [d.tag_name for d in descriptors] == ["div", "span"]

    @pytest.mark.unit
    def test_empty_document(self):
        """空文件沒有元素"""
        assert list(scan("")) == []


@pytest.mark.unit
class TestAttributes:
    """屬性讀取"""

    @pytest.mark.unit
    def test_absent_is_none(self):
        """不存在的屬性為 None"""
        d = list(scan("<p>hi</p>"))[0]
        assert d.attributes == SelectorAttributes()

    @pytest.mark.unit
    def test_empty_string_is_absent(self):
        """空字串視為不存在"""
        d = list(scan('<div id="" aria-label="">x</div>'))[0]
        assert d.attributes.id is None
        assert d.attributes.aria_label is None

    @pytest.mark.unit
    def test_four_selector_attributes(self):
        d = list(scan(
            '<div id="a" data-test-id="b" data-role="c" aria-label="d"></div>'
        ))[0]
        assert d.attributes == SelectorAttributes(
            id="a", data_test_id="b", data_role="c", aria_label="d",
        )

    @pytest.mark.unit
    def test_data_testid_alias(self):
        """data-testid 是 data-test-id 的別名"""
        d = list(scan('<div data-testid="x"></div>'))[0]
        assert d.attributes.data_test_id == "x"

    @pytest.mark.unit
    def test_data_test_id_wins_over_alias(self):
        d = list(scan('<div data-testid="alias" data-test-id="main"></div>'))[0]
        assert d.attributes.data_test_id == "main"

    @pytest.mark.unit
    def test_affordances(self):
        """role / input type / onclick 一次取得"""
        html = '<input type="CHECKBOX"><div role="button" onclick="go()"></div>'
        first, second = list(scan(html))
        assert first.affordances == Affordances(input_type="checkbox")
        assert second.affordances == Affordances(role="button", has_click_handler=True)

    @pytest.mark.unit
    def test_tag_name_lowercase(self):
        root = ElementTree.fromstring("<DIV><SPAN/></DIV>")
        assert [d.tag_name for d in scan(root)] == ["div", "span"]


@pytest.mark.unit
class TestInvalidRoot:
    """不合法的根節點"""

    @pytest.mark.unit
    @pytest.mark.parametrize("root", [None, 42, {"a": 1}, ["<div/>"]])
    def test_raises_invalid_root(self, root):
        with pytest.raises(InvalidRootError) as exc_info:
            scan(root)
        assert exc_info.value.context["root_type"] == type(root).__name__

    @pytest.mark.unit
    def test_empty_element_tree(self):
        """沒有根元素的 ElementTree"""
        with pytest.raises(InvalidRootError):
            scan(ElementTree.ElementTree())


@pytest.mark.unit
class TestDriverSnapshot:
    """WebDriver 快照"""

    @pytest.mark.unit
    def test_reads_page_source_once(self):
        """只讀一次 page_source"""
        driver = MagicMock()
        page_source = PropertyMock(return_value="<div id='a'></div>")
        type(driver).page_source = page_source

        html = snapshot_from_driver(driver)

        assert html == "<div id='a'></div>"
        page_source.assert_called_once()
        assert list(scan(html))[0].attributes.id == "a"
