"""listingparser - turn scraped product-page text into clean listing fields.

Quick usage::

    from listingparser import extract

    listing = extract(
        title_candidates=["  Acme Steel Bottle 1L  "],
        bullet_blobs="Keeps drinks cold for 24 hours\\n• Leak-proof lid",
        description_candidates=[description_text],
    )
    print(listing.title, listing.bullets, listing.description)

Hand-off to a language model::

    from listingparser import rewrite_listing

    optimized = rewrite_listing(listing, complete=my_completion_fn)
"""

from listingparser.config import ConfigError, ExtractionConfig, load_config
from listingparser.extractors import (
    classify_bullets,
    classify_description,
    clean_bullets,
    normalize,
    split_segments,
)
from listingparser.items import ExtractedListing, ListingCandidates, OptimizedListing
from listingparser.listing import extract, extract_candidates
from listingparser.rewrite import RewriteError, build_rewrite_prompt, rewrite_listing

__version__ = "0.1.0"
__all__ = [
    "ConfigError",
    "ExtractedListing",
    "ExtractionConfig",
    "ListingCandidates",
    "OptimizedListing",
    "RewriteError",
    "build_rewrite_prompt",
    "classify_bullets",
    "classify_description",
    "clean_bullets",
    "extract",
    "extract_candidates",
    "load_config",
    "normalize",
    "rewrite_listing",
    "split_segments",
]
