"""Tests for structural edits, text replacement and cloning."""

import random
import time
import unittest

from pagedom.dom import (
    clone_node,
    create_element,
    create_text_node,
    get_elements_by_tag_name,
    remove_nodes,
    set_text_content,
)

from helpers import assert_tree_consistent, parse_html_source

PAIR = "<div><p>Lonely word</p><span>new friend</span></div>"


class TestAppendChild(unittest.TestCase):
    def test_child_from_existing_node(self):
        doc = parse_html_source(PAIR)
        p = get_elements_by_tag_name(doc, "p")[0]
        span = get_elements_by_tag_name(doc, "span")[0]

        assert p.append_child(span) is span
        assert doc.outer_html == "<div><p>Lonely word<span>new friend</span></p></div>"
        assert_tree_consistent(doc)

    def test_child_is_new_element(self):
        doc = parse_html_source(PAIR)
        p = get_elements_by_tag_name(doc, "p")[0]

        p.append_child(create_element("span"))
        assert doc.outer_html == "<div><p>Lonely word<span></span></p><span>new friend</span></div>"
        assert_tree_consistent(doc)

    def test_move_between_trees(self):
        source = parse_html_source("<ul><li>a</li><li>b</li><li>c</li></ul>")
        target = parse_html_source("<ol></ol>")
        b = source.child_nodes[1]

        target.append_child(b)
        assert len(source.child_nodes) == 2
        assert [child is b for child in target.child_nodes] == [True]
        assert source.outer_html == "<ul><li>a</li><li>c</li></ul>"
        assert target.outer_html == "<ol><li>b</li></ol>"
        assert_tree_consistent(source)
        assert_tree_consistent(target)

    def test_append_own_last_child_is_stable(self):
        doc = parse_html_source("<div><a></a><b></b></div>")
        doc.append_child(doc.last_child)
        assert doc.outer_html == "<div><a></a><b></b></div>"
        assert_tree_consistent(doc)

    def test_refuses_text_parent(self):
        text = create_text_node("leaf")
        with self.assertLogs("pagedom.dom.node", "WARNING"):
            assert text.append_child(create_element("b")) is None
        assert text.child_nodes == []

    def test_refuses_cycles(self):
        doc = parse_html_source("<div><p><span></span></p></div>")
        span = get_elements_by_tag_name(doc, "span")[0]
        with self.assertLogs("pagedom.dom.node", "WARNING"):
            assert span.append_child(doc) is None
            assert doc.append_child(doc) is None
        assert doc.outer_html == "<div><p><span></span></p></div>"
        assert_tree_consistent(doc)


class TestPrependChild(unittest.TestCase):
    def test_child_from_existing_node(self):
        doc = parse_html_source(PAIR)
        p = get_elements_by_tag_name(doc, "p")[0]
        span = get_elements_by_tag_name(doc, "span")[0]

        p.prepend_child(span)
        assert doc.outer_html == "<div><p><span>new friend</span>Lonely word</p></div>"
        assert_tree_consistent(doc)

    def test_child_is_new_element(self):
        doc = parse_html_source(PAIR)
        p = get_elements_by_tag_name(doc, "p")[0]

        p.prepend_child(create_element("span"))
        assert doc.outer_html == "<div><p><span></span>Lonely word</p><span>new friend</span></div>"
        assert_tree_consistent(doc)

    def test_prepend_into_empty(self):
        div = create_element("div")
        div.prepend_child(create_text_node("x"))
        assert div.outer_html == "<div>x</div>"
        assert_tree_consistent(div)


class TestInsertBefore(unittest.TestCase):
    def test_move_forward_within_parent(self):
        doc = parse_html_source("<div><a></a><b></b><i></i></div>")
        a, b, i = doc.child_nodes
        doc.insert_before(a, i)
        assert doc.outer_html == "<div><b></b><a></a><i></i></div>"
        assert_tree_consistent(doc)

    def test_none_reference_appends(self):
        doc = parse_html_source("<div><a></a></div>")
        doc.insert_before(create_element("b"), None)
        assert doc.outer_html == "<div><a></a><b></b></div>"

    def test_foreign_reference_is_a_noop(self):
        doc = parse_html_source("<div><a></a></div>")
        with self.assertLogs("pagedom.dom.node", "WARNING"):
            assert doc.insert_before(create_element("b"), create_element("a")) is None
        assert doc.outer_html == "<div><a></a></div>"


class TestReplaceChild(unittest.TestCase):
    def test_new_child_from_existing_element(self):
        doc = parse_html_source(PAIR)
        p = get_elements_by_tag_name(doc, "p")[0]
        span = get_elements_by_tag_name(doc, "span")[0]

        assert doc.replace_child(span, p) is p
        assert doc.outer_html == "<div><span>new friend</span></div>"
        assert p.parent_node is None
        assert p.previous_sibling is None and p.next_sibling is None
        assert_tree_consistent(doc)

    def test_new_node_is_new_element(self):
        doc = parse_html_source(PAIR)
        p = get_elements_by_tag_name(doc, "p")[0]

        doc.replace_child(create_element("span"), p)
        assert doc.outer_html == "<div><span></span><span>new friend</span></div>"
        assert_tree_consistent(doc)

    def test_keeps_position_in_middle(self):
        doc = parse_html_source("<div><a></a><b></b><i></i></div>")
        doc.replace_child(create_element("em"), doc.child_nodes[1])
        assert doc.outer_html == "<div><a></a><em></em><i></i></div>"
        assert_tree_consistent(doc)

    def test_with_earlier_sibling(self):
        doc = parse_html_source("<div><a></a><b></b><i></i></div>")
        a, b, i = doc.child_nodes
        doc.replace_child(a, i)
        assert doc.outer_html == "<div><b></b><a></a></div>"
        assert_tree_consistent(doc)

    def test_old_child_not_a_child_is_a_noop(self):
        doc = parse_html_source(PAIR)
        other = parse_html_source("<section><em>keep me</em></section>")
        em = other.first_child
        stranger = create_element("p")

        with self.assertLogs("pagedom.dom.node", "WARNING"):
            assert doc.replace_child(em, stranger) is None
        assert doc.outer_html == PAIR
        assert other.outer_html == "<section><em>keep me</em></section>"
        assert em.parent_node is other
        assert_tree_consistent(doc)
        assert_tree_consistent(other)

    def test_replace_with_itself(self):
        doc = parse_html_source(PAIR)
        p = doc.first_child
        assert doc.replace_child(p, p) is p
        assert doc.outer_html == PAIR


class TestRemoval(unittest.TestCase):
    SOURCE = "<div><h1></h1><h1></h1><p></p><img/></div>"

    def test_remove_nodes(self):
        tests = [
            ("remove all", None, "<div></div>"),
            ("remove one tag", lambda n: n.tag_name == "h1", "<div><p></p><img/></div>"),
            ("remove several tags", lambda n: n.tag_name in ("h1", "p"), "<div><img/></div>"),
        ]
        for name, predicate, want in tests:
            with self.subTest(name=name):
                doc = parse_html_source(self.SOURCE)
                remove_nodes(get_elements_by_tag_name(doc, "*"), predicate)
                assert doc.outer_html == want
                assert_tree_consistent(doc)

    def test_subtree_goes_with_node(self):
        doc = parse_html_source("<div><section><p>a</p><p>b</p></section><i>c</i></div>")
        section = doc.first_child
        assert remove_nodes([section]) == 1
        assert doc.outer_html == "<div><i>c</i></div>"
        assert section.outer_html == "<section><p>a</p><p>b</p></section>"
        assert section.parent_node is None

    def test_live_child_list(self):
        doc = parse_html_source("<div>a<b>b</b>c<i>d</i></div>")
        remove_nodes(doc.child_nodes, lambda n: n.is_text)
        assert doc.outer_html == "<div><b>b</b><i>d</i></div>"
        assert_tree_consistent(doc)

    def test_removing_many_siblings_is_linear(self):
        count = 50000
        div = create_element("div")
        for _ in range(count):
            div.append_child(create_element("p"))

        started = time.perf_counter()
        assert remove_nodes(list(div.child_nodes)) == count
        assert remove_nodes(div.child_nodes) == 0
        elapsed = time.perf_counter() - started

        assert div.child_nodes == []
        assert elapsed < 5.0

    def test_detached_nodes_are_skipped(self):
        assert remove_nodes([create_element("p")]) == 0

    def test_remove_child_and_remove(self):
        doc = parse_html_source("<div><a></a><b></b></div>")
        a, b = doc.child_nodes
        assert doc.remove_child(a) is a
        b.remove()
        b.remove()
        assert doc.outer_html == "<div></div>"
        with self.assertLogs("pagedom.dom.node", "WARNING"):
            assert doc.remove_child(a) is None


class TestSetTextContent(unittest.TestCase):
    def test_replaces_all_children(self):
        sources = [
            "<div></div>",
            "<div><p>Hello</p></div>",
            "<div><p>Hello</p><p>I'm</p><p>Happy</p></div>",
            "<div><p>Hello I'm <span>Happy</span></p></div>",
            "<div><p>Hello I'm</p>happy</div>",
        ]
        for source in sources:
            with self.subTest(source=source):
                root = parse_html_source(source)
                old_children = list(root.child_nodes)

                set_text_content(root, "XXX")
                assert root.outer_html == "<div>XXX</div>"
                assert len(root.child_nodes) == 1
                assert root.first_child.is_text
                assert root.first_child.data == "XXX"
                assert all(child.parent_node is None for child in old_children)
                assert_tree_consistent(root)

    def test_property_setter(self):
        root = parse_html_source("<p>old <b>bold</b></p>")
        root.text_content = "a < b"
        assert root.outer_html == "<p>a &lt; b</p>"
        assert root.text_content == "a < b"

    def test_text_node_payload(self):
        text = create_text_node("before")
        set_text_content(text, "after")
        assert text.data == "after"
        assert text.child_nodes == []


class TestCloneNode(unittest.TestCase):
    def test_clone_renders_the_same(self):
        tests = [
            ("<div></div>", "<div></div>"),
            ("<div><p>Hello</p></div>", "<div><p>Hello</p></div>"),
            ("<div><p>Hello</p><p>I'm</p><p>Happy</p></div>",
             "<div><p>Hello</p><p>I&#39;m</p><p>Happy</p></div>"),
            ("<div><p>Hello I'm <span>Happy</span></p></div>",
             "<div><p>Hello I&#39;m <span>Happy</span></p></div>"),
            ("<div><p>Hello I'm</p>happy</div>", "<div><p>Hello I&#39;m</p>happy</div>"),
        ]
        for source, want in tests:
            with self.subTest(source=source):
                clone = clone_node(parse_html_source(source))
                assert clone.outer_html == want
                assert_tree_consistent(clone)

    def test_clone_is_independent(self):
        doc = parse_html_source('<div class="box"><p id="x">text</p></div>')
        p = doc.first_child
        clone = p.clone_node()

        assert clone.parent_node is None
        assert clone is not p and clone.is_equal_node(p)

        clone.set_attribute("id", "y")
        clone.first_child.data = "changed"
        clone.append_child(create_element("b"))

        assert doc.outer_html == '<div class="box"><p id="x">text</p></div>'
        assert clone.outer_html == '<p id="y">changed<b></b></p>'
        assert all(a is not b for a, b in zip(clone.attributes, p.attributes))

    def test_shallow_clone(self):
        p = parse_html_source('<p id="x">text</p>')
        shallow = p.clone_node(deep=False)
        assert shallow.outer_html == '<p id="x"></p>'


class TestRandomMutations(unittest.TestCase):
    """Mixed edit sequences never break parent or sibling links."""

    def test_links_stay_consistent(self):
        rng = random.Random(1234)
        pool = [create_element(rng.choice(["div", "p", "span"])) for _ in range(12)]
        pool += [create_text_node(str(i)) for i in range(6)]

        for _ in range(600):
            op = rng.choice(["append", "prepend", "insert", "replace", "remove"])
            parent = rng.choice(pool)
            node = rng.choice(pool)
            if op == "append":
                parent.append_child(node)
            elif op == "prepend":
                parent.prepend_child(node)
            elif op == "insert" and parent.child_nodes:
                parent.insert_before(node, rng.choice(parent.child_nodes))
            elif op == "replace" and parent.child_nodes:
                parent.replace_child(node, rng.choice(parent.child_nodes))
            elif op == "remove":
                remove_nodes([node])

            for root in pool:
                if root.parent_node is None:
                    assert_tree_consistent(root)

        # every node hangs below exactly one root
        reachable = []
        for root in pool:
            if root.parent_node is None:
                reachable.append(root)
                reachable.extend(get_elements_by_tag_name(root, "*"))
        assert len({id(n) for n in reachable}) == len(reachable)



if __name__ == "__main__":
    unittest.main()
