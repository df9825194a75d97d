"""
Factory helpers for creating test comic data.

``make_comic_dict`` returns the JSON document xkcd serves for one comic;
``make_comic`` and ``make_store`` wrap it in the real model classes so the
same parsing code paths as production are exercised.
"""


def make_comic_dict(num=1, title=None, img=None, **overrides):
    """Return a dict shaped like https://xkcd.com/<num>/info.0.json."""
    title = title or f"Comic {num}"
    data = {
        "month": "1",
        "num": num,
        "link": "",
        "year": "2006",
        "news": "",
        "safe_title": title,
        "transcript": "",
        "alt": f"Alt text for {num}",
        "img": img if img is not None else f"https://imgs.xkcd.com/comics/comic_{num}.png",
        "title": title,
        "day": "1",
    }
    data.update(overrides)
    return data


def make_comic(num=1, **overrides):
    from models.comic import Comic
    return Comic.from_dict(make_comic_dict(num, **overrides))


def make_store(cache_dir, numbers=(), tiers=None, client=None):
    """
    Store whose comics list holds a Comic at each of ``numbers`` and None
    elsewhere, sized to the highest number.
    """
    from store import Store
    size = max(numbers) + 1 if numbers else 0
    comics = [None] * size
    for n in numbers:
        comics[n] = make_comic(n)
    return Store(comics=comics, tier_assignments=list(tiers or []), cache_dir=cache_dir, client=client)
