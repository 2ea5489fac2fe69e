"""Jinja sources for every section template, keyed by template id.

Templates receive ``s`` (the block's props, never assumed to have any key)
and ``theme`` (tokens from :func:`blockbuilder.render.theme.get_theme_tokens`).
Use ``s.get(...)`` rather than attribute access: keys such as ``items`` would
otherwise resolve to dict methods.
"""

from __future__ import annotations

from typing import Dict

BASE_TEMPLATE = """<!doctype html>
<html lang="en">
<head>
  <meta charset="utf-8">
  <meta name="viewport" content="width=device-width, initial-scale=1">
  <title>{% if title %}{{ title }} · {% endif %}{{ site_name }}</title>
  <style>
    body { margin: 0; font-family: system-ui, sans-serif; background: {{ theme.page_bg }}; }
    main { max-width: 1120px; margin: 0 auto; padding: 24px; }
    img { max-width: 100%; display: block; }
    .grid { display: grid; gap: 16px; grid-template-columns: repeat(auto-fit, minmax(200px, 1fr)); }
    .btn { display: inline-block; padding: 10px 20px; border-radius: 8px; color: #fff; text-decoration: none; font-weight: 600; }
  </style>
</head>
<body>
<main>
{% for section in sections %}{{ section }}
{% endfor %}
</main>
</body>
</html>
"""

NAVBAR = """{% set links = s.get('links') | listof %}
<nav class="section navbar" style="{{ theme.card_style }};display:flex;justify-content:space-between;align-items:center{% if s.get('bgColor') %};background:{{ s.get('bgColor') }}{% endif %}{% if s.get('textColor') %};color:{{ s.get('textColor') }}{% endif %}">
  <div style="font-weight:700;font-size:1.125rem">{{ pick(s.get('logo'), s.get('brand'), 'Logo') }}</div>
  <div style="display:flex;gap:24px">
  {% for l in links %}{% set l = l | obj %}
    <a href="{{ pick(l.get('url'), '#') }}" style="color:inherit;opacity:.8">{{ pick(l.get('text'), l.get('name'), 'Link ' ~ loop.index) }}</a>
  {% endfor %}
  </div>
</nav>"""

HERO = """{% set title = pick(s.get('title'), s.get('heading'), 'Hero Title') %}
{% set subtitle = pick(s.get('subtitle'), s.get('subheading'), s.get('description'), s.get('tagline')) %}
{% set img = pick(s.get('imageUrl'), s.get('image'), s.get('backgroundUrl')) %}
{% set cta = s.get('cta') | obj %}
{% set button = pick(cta.get('text'), s.get('buttonText'), s.get('ctaButtonText')) %}
<section class="section hero" style="border-radius:{{ theme.radius }};box-shadow:{{ theme.shadow }};margin-bottom:24px;padding:64px 32px;text-align:center;background:{{ pick(s.get('bgColor'), theme.card_bg) }};color:{{ pick(s.get('textColor'), theme.card_fg) }}">
  {% if img %}<img src="{{ img }}" alt="{{ title }}" style="max-height:320px;margin:0 auto 24px;object-fit:cover;border-radius:{{ theme.radius }}">{% endif %}
  <h1 style="font-size:3rem;margin:0 0 16px">{{ title }}</h1>
  {% if subtitle %}<p style="font-size:1.25rem;opacity:.9">{{ subtitle }}</p>{% endif %}
  {% if button %}<a class="btn" href="{{ pick(s.get('buttonLink'), '#') }}" style="background:{{ theme.primary }}">{{ button }}</a>{% endif %}
  {% if cta.get('secondaryText') %}<a class="btn" href="#" style="background:rgba(0,0,0,.2)">{{ cta.get('secondaryText') }}</a>{% endif %}
</section>"""

PRODUCT_GRID = """{% set items = s.get('products') | listof or s.get('items') | listof %}
<section class="section products" style="{{ theme.card_style }}">
  {% if s.get('title') %}<h2>{{ s.get('title') }}</h2>{% endif %}
  <div class="grid">
  {% for p in items %}{% set p = p | obj %}
    <div style="border:1px solid {{ theme.card_border }};border-radius:{{ theme.radius }};padding:16px">
      {% if pick(p.get('image'), p.get('imageUrl')) %}<img src="{{ pick(p.get('image'), p.get('imageUrl')) }}" alt="{{ pick(p.get('name'), p.get('title')) }}" style="height:160px;width:100%;object-fit:cover;margin-bottom:12px">{% endif %}
      <h3 style="font-size:.9rem;margin:0 0 4px">{{ pick(p.get('name'), p.get('title'), 'Product') }}</h3>
      {% if p.get('description') %}<p style="font-size:.8rem;color:{{ theme.text_muted }}">{{ p.get('description') }}</p>{% endif %}
      <strong style="color:{{ theme.primary }}">{{ pick(p.get('price'), '$0.00') }}</strong>
    </div>
  {% endfor %}
  </div>
</section>"""

FEATURES = """{% set items = s.get('features') | listof or s.get('items') | listof %}
<section class="section features" style="{{ theme.card_style }}{% if s.get('bgColor') %};background:{{ s.get('bgColor') }}{% endif %}{% if s.get('textColor') %};color:{{ s.get('textColor') }}{% endif %}">
  {% if s.get('title') %}<h2 style="text-align:center">{{ s.get('title') }}</h2>{% endif %}
  <div class="grid">
  {% for f in items %}{% set f = f | obj %}
    <div style="text-align:center;padding:24px">
      <div style="font-size:2.25rem">{{ pick(f.get('icon'), '⭐') }}</div>
      <h3>{{ pick(f.get('title'), f.get('name'), 'Feature') }}</h3>
      <p style="color:{{ theme.text_muted }}">{{ pick(f.get('description'), '') }}</p>
    </div>
  {% endfor %}
  </div>
</section>"""

CATEGORIES = """{% set items = s.get('categories') | listof or s.get('items') | listof %}
<section class="section categories" style="{{ theme.card_style }}">
  {% if s.get('title') %}<h2>{{ s.get('title') }}</h2>{% endif %}
  <div class="grid">
  {% for c in items %}{% set c = c | obj %}
    <div style="border-radius:{{ theme.radius }};overflow:hidden;border:1px solid {{ theme.card_border }}">
      {% if pick(c.get('image'), c.get('imageUrl')) %}<img src="{{ pick(c.get('image'), c.get('imageUrl')) }}" alt="{{ c.get('name') }}" style="height:128px;width:100%;object-fit:cover">{% endif %}
      <div style="padding:12px;font-weight:600">{{ pick(c.get('name'), c.get('title'), 'Category') }}</div>
    </div>
  {% endfor %}
  </div>
</section>"""

TESTIMONIALS = """{% set items = s.get('testimonials') | listof or s.get('items') | listof %}
<section class="section testimonials" style="{{ theme.card_style }}">
  {% if s.get('title') %}<h2 style="text-align:center">{{ s.get('title') }}</h2>{% endif %}
  <div class="grid">
  {% for t in items %}{% set t = t | obj %}
    <figure style="margin:0;padding:20px;border:1px solid {{ theme.card_border }};border-radius:{{ theme.radius }}">
      <div style="color:#facc15">{{ '★' * stars(t.get('rating')) }}</div>
      <blockquote style="font-style:italic;margin:12px 0">“{{ pick(t.get('text'), t.get('quote'), t.get('content'), 'Great product!') }}”</blockquote>
      <figcaption style="font-size:.85rem">{{ pick(t.get('name'), t.get('author'), 'Customer') }}{% if t.get('role') %} · <span style="color:{{ theme.text_muted }}">{{ t.get('role') }}</span>{% endif %}</figcaption>
    </figure>
  {% endfor %}
  </div>
</section>"""

PRICING = """{% set plans = s.get('plans') | listof or s.get('items') | listof %}
<section class="section pricing" style="{{ theme.card_style }}">
  {% if s.get('title') %}<h2 style="text-align:center">{{ s.get('title') }}</h2>{% endif %}
  <div class="grid">
  {% for p in plans %}{% set p = p | obj %}
    <div style="padding:24px;text-align:center;border-radius:{{ theme.radius }};border:2px solid {% if p.get('featured') %}{{ theme.primary }}{% else %}{{ theme.card_border }}{% endif %}">
      <h3>{{ pick(p.get('name'), 'Plan') }}</h3>
      <div style="font-size:2.25rem;font-weight:800;color:{{ theme.primary }}">{{ pick(p.get('price'), '$0') }}</div>
      {% if p.get('description') %}<p style="color:{{ theme.text_muted }}">{{ p.get('description') }}</p>{% endif %}
      <ul style="text-align:left">
      {% for feature in p.get('features') | listof %}<li>✓ {{ feature }}</li>{% endfor %}
      </ul>
      <a class="btn" href="#" style="background:{{ theme.primary }}">{{ pick(p.get('buttonText'), 'Choose Plan') }}</a>
    </div>
  {% endfor %}
  </div>
</section>"""

GALLERY = """<section class="section gallery" style="{{ theme.card_style }}">
  {% if s.get('title') %}<h2>{{ s.get('title') }}</h2>{% endif %}
  <div class="grid">
  {% for img in s.get('images') | listof %}
    {% if img is string %}{% set src, caption = img, '' %}{% else %}{% set img = img | obj %}{% set src, caption = pick(img.get('url'), img.get('src'), ''), pick(img.get('caption'), '') %}{% endif %}
    <figure style="margin:0;border-radius:{{ theme.radius }};overflow:hidden">
      <img src="{{ src }}" alt="{{ pick(caption, 'Gallery ' ~ loop.index0) }}" style="width:100%;height:160px;object-fit:cover">
      {% if caption %}<figcaption style="font-size:.75rem;color:{{ theme.text_muted }}">{{ caption }}</figcaption>{% endif %}
    </figure>
  {% endfor %}
  </div>
</section>"""

VIDEO = """{% set url = pick(s.get('url'), s.get('videoUrl'), s.get('src')) %}
<section class="section video" style="{{ theme.card_style }}">
  {% if s.get('title') %}<h2>{{ s.get('title') }}</h2>{% endif %}
  {% if url %}<iframe src="{{ url }}" title="{{ pick(s.get('title'), 'Video') }}" style="width:100%;aspect-ratio:16/9;border:0" allowfullscreen></iframe>{% endif %}
</section>"""

STATS = """{% set items = s.get('stats') | listof or s.get('items') | listof %}
<section class="section stats" style="{{ theme.card_style }}">
  <div class="grid">
  {% for st in items %}{% set st = st | obj %}
    <div style="text-align:center">
      <div style="font-size:2.25rem;font-weight:800;color:{{ theme.primary }}">{{ pick(st.get('value'), '0') }}</div>
      <div style="color:{{ theme.text_muted }}">{{ pick(st.get('label'), 'Stat') }}</div>
    </div>
  {% endfor %}
  </div>
</section>"""

PROCESS = """{% set steps = s.get('steps') | listof or s.get('items') | listof %}
<section class="section process" style="{{ theme.card_style }}">
  {% if s.get('title') %}<h2>{{ s.get('title') }}</h2>{% endif %}
  <ol class="grid" style="list-style:none;padding:0">
  {% for step in steps %}{% set step = step | obj %}
    <li style="display:flex;gap:16px">
      <span style="flex:none;width:48px;height:48px;border-radius:9999px;background:{{ theme.primary }};color:#fff;display:flex;align-items:center;justify-content:center;font-weight:700">{{ loop.index }}</span>
      <div><h3 style="margin:0 0 4px">{{ pick(step.get('title'), 'Step ' ~ loop.index) }}</h3><p style="color:{{ theme.text_muted }}">{{ pick(step.get('description'), '') }}</p></div>
    </li>
  {% endfor %}
  </ol>
</section>"""

ABOUT = """{% set heading = pick(s.get('title'), s.get('heading')) %}
{% set body = pick(s.get('content'), s.get('text'), s.get('description'), s.get('story')) %}
<section class="section about" style="{{ theme.card_style }};text-align:{{ pick(s.get('alignment'), 'left') }}{% if s.get('bgColor') %};background:{{ s.get('bgColor') }}{% endif %}{% if s.get('textColor') %};color:{{ s.get('textColor') }}{% endif %}">
  {% if heading %}<h2>{{ heading }}</h2>{% endif %}
  {% if body %}<p style="white-space:pre-wrap">{{ body }}</p>{% endif %}
  {% if s.get('image') %}<img src="{{ s.get('image') }}" alt="{{ heading }}" style="border-radius:{{ theme.radius }}">{% endif %}
</section>"""

TEAM = """{% set members = s.get('team') | listof or s.get('members') | listof or s.get('items') | listof %}
{% set subtitle = pick(s.get('subtitle'), s.get('description')) %}
<section class="section team" style="{{ theme.card_style }}">
  {% if s.get('title') %}<h2>{{ s.get('title') }}</h2>{% endif %}
  {% if subtitle %}<p style="color:{{ theme.text_muted }}">{{ subtitle }}</p>{% endif %}
  <div class="grid">
  {% for m in members %}{% set m = m | obj %}
    <div style="text-align:center;padding:16px;border:1px solid {{ theme.card_border }};border-radius:{{ theme.radius }}">
      {% if m.get('image') %}<img src="{{ m.get('image') }}" alt="{{ m.get('name') }}" style="width:80px;height:80px;border-radius:9999px;margin:0 auto 8px;object-fit:cover">{% endif %}
      <div style="font-weight:600">{{ pick(m.get('name'), 'Team Member') }}</div>
      {% if pick(m.get('title'), m.get('role')) %}<div style="font-size:.75rem;color:{{ theme.text_muted }}">{{ pick(m.get('title'), m.get('role')) }}</div>{% endif %}
      {% if m.get('bio') %}<p style="font-size:.85rem">{{ m.get('bio') }}</p>{% endif %}
    </div>
  {% endfor %}
  </div>
</section>"""

FAQ = """{% set items = s.get('faqs') | listof or s.get('questions') | listof or s.get('items') | listof %}
<section class="section faq" style="{{ theme.card_style }}">
  <h2>{{ pick(s.get('title'), 'Frequently Asked Questions') }}</h2>
  {% for q in items %}{% set q = q | obj %}
  <details style="border-bottom:1px solid {{ theme.card_border }};padding:12px 0">
    <summary style="font-weight:600">{{ pick(q.get('question'), q.get('q'), 'Question') }}</summary>
    <p style="color:{{ theme.text_muted }}">{{ pick(q.get('answer'), q.get('a'), '') }}</p>
  </details>
  {% endfor %}
</section>"""

CTA = """{% set cta = s.get('cta') | obj %}
{% set subtitle = pick(s.get('subtitle'), s.get('subheading'), s.get('description')) %}
<section class="section cta" style="border-radius:{{ theme.radius }};box-shadow:{{ theme.shadow }};padding:32px;margin-bottom:24px;text-align:center;background:{{ pick(s.get('bgColor'), theme.primary) }};color:{{ pick(s.get('textColor'), '#ffffff') }}">
  <h2>{{ pick(s.get('title'), s.get('heading'), 'Ready to Get Started?') }}</h2>
  {% if subtitle %}<p style="opacity:.9">{{ subtitle }}</p>{% endif %}
  <a class="btn" href="{{ pick(s.get('buttonLink'), '#') }}" style="background:#fff;color:#171717">{{ pick(cta.get('text'), s.get('buttonText'), 'Get Started') }}</a>
</section>"""

NEWSLETTER = """{% set subtitle = pick(s.get('subtitle'), s.get('description'), s.get('subheading')) %}
<section class="section newsletter" style="{{ theme.card_style }};text-align:center{% if s.get('bgColor') %};background:{{ s.get('bgColor') }}{% endif %}">
  <h3>{{ pick(s.get('title'), s.get('heading'), 'Newsletter') }}</h3>
  {% if subtitle %}<p style="color:{{ theme.text_muted }}">{{ subtitle }}</p>{% endif %}
  <form style="display:flex;justify-content:center;gap:8px">
    <input type="email" disabled placeholder="{{ pick(s.get('placeholder'), s.get('placeholderEmail'), 'you@example.com') }}" style="padding:8px 12px;width:16rem">
    <button type="button" disabled class="btn" style="background:{{ theme.primary }}">{{ pick(s.get('ctaText'), s.get('ctaButtonText'), s.get('buttonText'), 'Subscribe') }}</button>
  </form>
</section>"""

CONTACT = """{% set subtitle = pick(s.get('subtitle'), s.get('description')) %}
<section class="section contact" style="{{ theme.card_style }}">
  <h2>{{ pick(s.get('title'), 'Contact us') }}</h2>
  {% if subtitle %}<p style="color:{{ theme.text_muted }}">{{ subtitle }}</p>{% endif %}
  <form style="display:grid;gap:12px;max-width:32rem">
    <input disabled placeholder="Your name">
    <input type="email" disabled placeholder="{{ pick(s.get('placeholder'), 'you@example.com') }}">
    <textarea disabled rows="4" placeholder="Message"></textarea>
    <button type="button" disabled class="btn" style="background:{{ theme.primary }}">{{ pick(s.get('buttonText'), 'Send Message') }}</button>
  </form>
</section>"""

LOCATION = """{% set places = s.get('locations') | listof or s.get('items') | listof %}
<section class="section location" style="{{ theme.card_style }}">
  <h2>{{ pick(s.get('title'), 'Visit us') }}</h2>
  {% if s.get('address') %}<p>{{ s.get('address') }}</p>{% endif %}
  {% if s.get('hours') %}<p style="color:{{ theme.text_muted }}">{{ s.get('hours') }}</p>{% endif %}
  {% for p in places %}{% set p = p | obj %}
    <p><strong>{{ pick(p.get('name'), 'Location') }}</strong>{% if p.get('address') %} · {{ p.get('address') }}{% endif %}</p>
  {% endfor %}
</section>"""

SOCIAL_FEED = """{% set posts = s.get('posts') | listof or s.get('images') | listof or s.get('items') | listof %}
<section class="section social" style="{{ theme.card_style }}">
  <h2>{{ pick(s.get('title'), s.get('handle'), 'Follow us') }}</h2>
  <div class="grid">
  {% for post in posts %}
    {% set src = post if post is string else pick((post | obj).get('image'), (post | obj).get('url'), '') %}
    {% if src %}<img src="{{ src }}" alt="Post {{ loop.index }}" style="aspect-ratio:1;object-fit:cover;border-radius:{{ theme.radius }}">{% endif %}
  {% endfor %}
  </div>
</section>"""

FOOTER = """<footer class="section footer" style="border-radius:{{ theme.radius }};padding:32px 24px;text-align:center;background:{{ pick(s.get('bgColor'), '#1f2937') }};color:{{ pick(s.get('textColor'), '#f3f4f6') }}">
  <div style="font-weight:600">{{ pick(s.get('companyName'), s.get('brand'), s.get('logo'), 'Company') }}</div>
  {% if s.get('tagline') %}<div style="opacity:.8;font-size:.85rem">{{ s.get('tagline') }}</div>{% endif %}
  {% set links = s.get('links') | listof %}
  {% if links %}<div style="display:flex;gap:16px;justify-content:center;margin-top:12px">
  {% for l in links %}{% set l = l | obj %}<a href="{{ pick(l.get('url'), '#') }}" style="color:inherit;opacity:.8">{{ pick(l.get('text'), 'Link') }}</a>{% endfor %}
  </div>{% endif %}
</footer>"""

TEXT = """{% set heading = pick(s.get('title'), s.get('heading')) %}
{% set body = pick(s.get('content'), s.get('text'), s.get('subtitle'), s.get('subheading'), s.get('description'), s.get('tagline')) %}
<section class="section text" style="padding:24px">
  {% if heading %}<h3>{{ heading }}</h3>{% endif %}
  {% if body %}<p style="white-space:pre-wrap">{{ body }}</p>{% endif %}
</section>"""

AUTH_FORM = """<section class="section auth" style="{{ theme.card_style }};max-width:28rem;margin-left:auto;margin-right:auto">
  <h2>{{ pick(s.get('title'), 'Welcome') }}</h2>
  {% if s.get('description') %}<p style="color:{{ theme.text_muted }}">{{ s.get('description') }}</p>{% endif %}
  <form style="display:grid;gap:12px">
    <input type="email" disabled placeholder="Email">
    <input type="password" disabled placeholder="Password">
    <button type="button" disabled class="btn" style="background:{{ theme.primary }}">{{ pick(s.get('buttonText'), 'Continue') }}</button>
  </form>
</section>"""

DIVIDER = """<hr class="section divider" style="border:0;border-top:{{ pick(s.get('thickness'), 1) }}px solid {{ pick(s.get('color'), theme.card_border) }};margin:24px 0">"""

SPACER = """<div class="section spacer" style="height:{{ pick(s.get('height'), 32) }}px"></div>"""

IMAGE = """{% set src = pick(s.get('src'), s.get('url'), s.get('image'), s.get('imageUrl')) %}
{% if src %}<figure class="section image" style="margin:0 0 24px"><img src="{{ src }}" alt="{{ pick(s.get('alt'), s.get('caption'), 'Image') }}" style="width:100%;border-radius:{{ theme.radius }}">{% if s.get('caption') %}<figcaption style="color:{{ theme.text_muted }}">{{ s.get('caption') }}</figcaption>{% endif %}</figure>{% endif %}"""

BUTTON = """<div class="section button" style="margin-bottom:24px"><a class="btn" href="{{ pick(s.get('link'), s.get('url'), '#') }}" style="background:{% if s.get('variant') == 'secondary' %}{{ theme.secondary }}{% else %}{{ theme.primary }}{% endif %}">{{ pick(s.get('text'), s.get('buttonText'), 'Click me') }}</a></div>"""


SECTION_TEMPLATES: Dict[str, str] = {
    "navbar": NAVBAR,
    "hero": HERO,
    "product_grid": PRODUCT_GRID,
    "features": FEATURES,
    "categories": CATEGORIES,
    "testimonials": TESTIMONIALS,
    "pricing": PRICING,
    "gallery": GALLERY,
    "video": VIDEO,
    "stats": STATS,
    "process": PROCESS,
    "about": ABOUT,
    "team": TEAM,
    "faq": FAQ,
    "cta": CTA,
    "newsletter": NEWSLETTER,
    "contact": CONTACT,
    "location": LOCATION,
    "social_feed": SOCIAL_FEED,
    "footer": FOOTER,
    "text": TEXT,
    "auth_form": AUTH_FORM,
    "divider": DIVIDER,
    "spacer": SPACER,
    "image": IMAGE,
    "button": BUTTON,
}
