from __future__ import annotations

import pytest

from listing_sync.config import SyncConfig


ID_A = "3f2a1b9c-1111-4c5d-8e9f-0a1b2c3d4e5f"
ID_B = "7d8e9f00-2222-4a1b-9c3d-5e6f7a8b9c0d"


def card(listing_id: str, title: str, address: str, rent: str, sqft: str) -> str:
    return f"""
    <div class="listing-item result js-listing-item">
      <div class="listing-item__figure-container">
        <a href="/listings/detail/{listing_id}">
          <img class="listing-item__image" src="/images/place_holder.png"
               data-original="https://images.cdn.appfolio.com/greyrock/images/{listing_id[:4]}/medium.jpg">
        </a>
      </div>
      <div class="listing-item__body">
        <h2 class="listing-item__title"><a href="/listings/detail/{listing_id}">{title}</a></h2>
        <p class="listing-item__address"><span class="js-listing-address">{address}</span></p>
        <dl class="detail-box">
          <dt>RENT</dt><dd class="js-listing-blurb-rent">{rent}</dd>
          <dt>Square Feet</dt><dd>{sqft}</dd>
          <dt>Available</dt><dd class="js-listing-available">Now</dd>
        </dl>
        <p class="js-listing-description">Bright corner suite with private offices, a conference room and covered parking.</p>
        <a class="btn" href="/listings/detail/{listing_id}">View Details</a>
        <a class="btn" href="/listings/rental_applications/new?listable_uid={listing_id}">Apply Now</a>
      </div>
    </div>
    """


INDEX_HTML = f"""
<html>
  <head><title>Current Vacancies</title></head>
  <body>
    <h1>Current Vacancies</h1>
    <div id="result_container" class="listings">
      {card(ID_A, "Suite 200 Office Space", "123 Main St, Charlotte, NC 28202", "$2,500", "1,200")}
      {card(ID_B, "Retail Storefront on Trade", "45 Trade St, Suite B, Matthews, NC 28105", "$3,150.00", "1,800")}
    </div>
  </body>
</html>
"""

EMPTY_INDEX_HTML = """
<html><body>
  <h1>Current Vacancies</h1>
  <p class="js-no-results">No vacancies found. Please check back later.</p>
</body></html>
"""

BROKEN_INDEX_HTML = """
<html><body>
  <h1>Current Vacancies</h1>
  <div class="property-grid"><a href="/properties/123">Some property</a></div>
</body></html>
"""

DETAIL_HTML = f"""
<html>
  <head><title>4500 Industrial Pkwy - GreyRock Commercial</title></head>
  <body>
    <header><img class="logo" src="https://images.cdn.appfolio.com/greyrock/large.png"></header>
    <h1>Current Vacancies</h1>
    <h2>Flex Warehouse with Loading Dock</h2>
    <div class="gallery">
      <a class="swipebox" href="#"><img src="https://images.cdn.appfolio.com/greyrock/images/1/medium.jpg"></a>
      <a class="swipebox" href="#"><img src="https://images.cdn.appfolio.com/greyrock/images/2/medium.jpg"></a>
      <img src="https://images.cdn.appfolio.com/greyrock/place_holder.png">
    </div>
    <p class="address">4500 Industrial Pkwy, Concord, NC 28027</p>
    <div class="listing-detail__description">
      <p>Clear-span flex building with two dock-high doors, a drive-in bay and 800 SF of finished office.</p>
    </div>
    <dl>
      <dt>RENT</dt><dd>$4,800</dd>
      <dt>SQUARE FEET</dt><dd>3,200</dd>
      <dt>RENT/SF</dt><dd>$21.50/yr</dd>
      <dt>AVAILABLE</dt><dd>3/1/2026</dd>
    </dl>
    <p>Commercial Type: Industrial</p>
    <p>Lease Type: NNN</p>
    <p>Utilities Included: Water, Trash</p>
    <a href="/listings/rental_applications/new?listable_uid={ID_A}">Apply Now</a>
    <footer><p>Privacy Policy | Terms of Service | Powered by AppFolio property management software</p></footer>
  </body>
</html>
"""

SPARSE_DETAIL_HTML = """
<html>
  <head><title>Corner Retail Bay</title></head>
  <body>
    <h1>Details</h1>
    <img src="https://images.cdn.appfolio.com/greyrock/images/9/medium.jpg">
    <img src="https://images.cdn.appfolio.com/greyrock/large.png">
    <p>Short note.</p>
    <p>End-cap retail bay facing the main road with strong traffic counts and signage.</p>
    <p>Available June 2026</p>
  </body>
</html>
"""


@pytest.fixture
def config() -> SyncConfig:
    return SyncConfig(
        base_url="https://greyrockcommercial.appfolio.com",
        listings_url="https://greyrockcommercial.appfolio.com/listings",
        mode="detail",
        max_listings=200,
    )
