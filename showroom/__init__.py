"""Car Showroom - Backend.

A JSON API for a car showroom's public site and its admin panel:

- Public reads: banners, brands, cars (filter/sort/page), rental listings.
- Admin writes behind a bearer token (JWT), plus image uploads to local disk.

Core invariant: every Brand caches how many Cars reference it (`carCount`), kept
in step as cars are created, reassigned and deleted (see `showroom.catalog.integrity`).

See README for setup and usage.
"""

__all__ = ["__version__"]

__version__ = "1.0.0"
