# rendering/templates.py

"""Inline jinja2 templates for the generated site."""

BASE_TEMPLATE = """<!DOCTYPE html>
<html lang="en">
<head>
<meta charset="utf-8">
<meta name="viewport" content="width=device-width, initial-scale=1">
<title>{% if title != site_title %}{{ title }} - {% endif %}{{ site_title }}</title>
<link rel="stylesheet" href="{{ root }}assets/pygments.css">
</head>
<body>
<nav class="sidebar">
<a class="site-title" href="{{ root }}index.html">{{ site_title }}</a>
{%- if toc.children %}
<ul>
{%- for node in toc.children recursive %}
<li{% if node.slug == current %} class="current"{% endif %}><a href="{{ root }}{{ hrefs[node.slug] }}">{{ node.title }}</a>
{%- if node.children %}<ul>{{ loop(node.children) }}</ul>{% endif %}</li>
{%- endfor %}
</ul>
{%- endif %}
</nav>
<main>
{% block content %}{% endblock %}
</main>
</body>
</html>
"""

PAGE_TEMPLATE = """{% extends "base.html" %}
{% block content %}
<article>
{%- for section in sections %}
<h{{ section.level }} id="{{ section.slug }}">{{ section.title }}</h{{ section.level }}>
<p class="sources">Sources: {{ section.sources | join(", ") }}</p>
{%- for variant in section.variants %}
{%- if variant.slug %}
<h{{ variant.level }} id="{{ variant.slug }}" class="variant">{{ variant.title }}</h{{ variant.level }}>
{%- endif %}
{%- for html in variant.blocks %}
{{ html }}
{%- endfor %}
{%- endfor %}
{%- endfor %}
{%- if subpages %}
<ul class="subpages">
{%- for node in subpages %}
<li><a href="{{ root }}{{ hrefs[node.slug] }}">{{ node.title }}</a></li>
{%- endfor %}
</ul>
{%- endif %}
</article>
{% endblock %}
"""

INDEX_TEMPLATE = """{% extends "base.html" %}
{% block content %}
<article>
<h1>{{ site_title }}</h1>
{%- for variant in preamble %}
{%- if variant.title %}
<h2 class="variant">{{ variant.title }}</h2>
{%- endif %}
{%- for html in variant.blocks %}
{{ html }}
{%- endfor %}
{%- endfor %}
<ul class="pages">
{%- for page in pages %}
<li><a href="{{ root }}{{ page.path }}">{{ page.title }}</a> <span class="sources">({{ page.sources | join(", ") }})</span></li>
{%- endfor %}
</ul>
<p class="sources">Built from: {{ sources | join(", ") }}</p>
</article>
{% endblock %}
"""

TEMPLATES = {
    "base.html": BASE_TEMPLATE,
    "page.html": PAGE_TEMPLATE,
    "index.html": INDEX_TEMPLATE,
}
