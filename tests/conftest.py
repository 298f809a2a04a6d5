"""Shared fixtures for WXR flattening tests."""

from pathlib import Path
from typing import List

import pytest

from wxr_flatten.models import EventKind, ParseEvent


SAMPLE_WXR = """<?xml version="1.0" encoding="UTF-8"?>
<rss version="2.0"
    xmlns:excerpt="http://wordpress.org/export/1.2/excerpt/"
    xmlns:content="http://purl.org/rss/1.0/modules/content/"
    xmlns:dc="http://purl.org/dc/elements/1.1/"
    xmlns:wp="http://wordpress.org/export/1.2/">
<channel>
  <title>Example Blog</title>
  <link>http://example.com</link>
  <wp:wxr_version>1.2</wp:wxr_version>
  <!-- generator comment -->
  <item>
    <title>Hello world!</title>
    <link>http://example.com/?p=1</link>
    <dc:creator><![CDATA[admin]]></dc:creator>
    <guid isPermaLink="false">http://example.com/?p=1</guid>
    <content:encoded><![CDATA[<p>Welcome to WordPress.</p>]]></content:encoded>
    <wp:post_id>1</wp:post_id>
    <wp:status>publish</wp:status>
    <category domain="category" nicename="news"><![CDATA[News]]></category>
    <category domain="category" nicename="updates"><![CDATA[Updates]]></category>
    <category domain="post_tag" nicename="intro"><![CDATA[intro]]></category>
    <wp:postmeta>
      <wp:meta_key>_edit_lock</wp:meta_key>
      <wp:meta_value><![CDATA[1221689350]]></wp:meta_value>
    </wp:postmeta>
    <wp:postmeta>
      <wp:meta_key>_edit_last</wp:meta_key>
      <wp:meta_value><![CDATA[1]]></wp:meta_value>
    </wp:postmeta>
  </item>
  <item>
    <title>About</title>
    <link>http://example.com/about/</link>
    <dc:creator><![CDATA[admin]]></dc:creator>
    <guid isPermaLink="false">http://example.com/?page_id=2</guid>
    <content:encoded><![CDATA[]]></content:encoded>
    <wp:post_id>2</wp:post_id>
    <wp:status>draft</wp:status>
  </item>
</channel>
</rss>
"""

SAMPLE_COLUMNS = [
    'title',
    'link',
    'dc:creator',
    'guid',
    'guid_isPermaLink',
    'content:encoded',
    'wp:post_id',
    'wp:status',
    'category_category',
    'category_post_tag',
    '_edit_lock',
    '_edit_last',
]


def open_(tag: str, value: str = None, **attributes) -> ParseEvent:
    return ParseEvent(EventKind.OPEN, tag, value, attributes or None)


def complete(tag: str, value: str = None, **attributes) -> ParseEvent:
    return ParseEvent(EventKind.COMPLETE, tag, value, attributes or None)


def close(tag: str) -> ParseEvent:
    return ParseEvent(EventKind.CLOSE, tag)


@pytest.fixture
def sample_wxr() -> str:
    """A small two-item WordPress export."""
    return SAMPLE_WXR


@pytest.fixture
def wxr_file(tmp_path: Path) -> Path:
    """The sample export written to disk."""
    path = tmp_path / "site.wordpress.xml"
    path.write_text(SAMPLE_WXR, encoding='utf-8')
    return path


@pytest.fixture
def item_events() -> List[ParseEvent]:
    """Events for a channel holding one item with every kind of child."""
    return [
        open_('rss', version='2.0'),
        open_('channel'),
        complete('title', 'Blog'),
        open_('item'),
        complete('title', ' Post '),
        complete('guid', 'http://x', isPermaLink='false'),
        complete('category', 'A', domain='category'),
        complete('category', 'B', domain='category'),
        open_('wp:postmeta'),
        complete('wp:meta_key', '_edit_lock'),
        complete('wp:meta_value', '1221689350'),
        close('wp:postmeta'),
        close('item'),
        close('channel'),
        close('rss'),
    ]
