from __future__ import annotations

from datetime import datetime, timezone

POST_URL = "https://example.com/posts/my-app"

FIXED_NOW = datetime(2025, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def fixed_clock() -> datetime:
    return FIXED_NOW


POST_HTML = """\
<html>
<head>
  <title>My App | Product Hunt</title>
  <meta property="og:title" content="My App (og)">
  <meta name="description" content="Meta description">
</head>
<body>
  <h1>My App</h1>
  <h2>Ship faster with less code</h2>
  <button data-test="vote-button">&#9650; 128 upvotes</button>
  <a data-test="comments-link" href="#comments">42 comments</a>
  <div class="makers">
    <a href="/@alice">Alice</a>
    <a href="/@bob">Bob</a>
    <a href="/@alice">Alice</a>
  </div>
  <a href="/topics/productivity">Productivity</a>
  <span class="topic">Productivity</span>
  <a href="/topics/developer-tools">Developer Tools</a>
  <a data-test="visit-site-button" href="/r/p/123">Visit website</a>
  <time datetime="2025-01-02T08:00:00Z">January 2nd</time>
  <a href="/posts/other-app">Other App</a>
</body>
</html>
"""

FALLBACK_HTML = """\
<html>
<head>
  <meta property="og:title" content="Fallback App">
  <meta name="description" content="Only in the meta tag">
</head>
<body>
  <span class="vote-count">1,024</span>
  <div class="comments-count">(7)</div>
  <span data-test="maker-name">Carol</span>
  <a rel="noopener nofollow" href="https://fallback.example/?ref=producthunt">fallback.example</a>
  <time>Yesterday</time>
</body>
</html>
"""

EMPTY_HTML = "<html><body><p>Nothing to see here.</p></body></html>"

LISTING_HTML = """\
<html>
<head><title>Product Hunt</title></head>
<body>
  <a href="/posts/first-app">First</a>
  <a href="/posts/first-app?ref=home#comments">First again</a>
  <a href="https://example.com/posts/second-app/">Second</a>
  <a href="https://elsewhere.com/posts/third-app">Offsite</a>
  <a href="/topics/ai">AI</a>
  <a href="mailto:hello@example.com">Mail</a>
</body>
</html>
"""
