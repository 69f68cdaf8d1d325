# Product data used by mock carts, so the cart and checkout flow can be
# exercised end to end without vendor credentials.
from typing import NamedTuple


class MockProduct(NamedTuple):
    name: str
    price: float


DEFAULT_MOCK_PRICE = 49.99

MOCK_PRODUCTS: dict[str, MockProduct] = {
    'MOCK-BD-001': MockProduct("Birthday Bliss Bouquet", 64.99),
    'MOCK-BD-002': MockProduct("Party Time Arrangement", 54.99),
    'MOCK-BD-003': MockProduct("Happy Birthday Roses", 79.99),
    'MOCK-BD-004': MockProduct("Sunshine Birthday Basket", 69.99),
    'MOCK-SY-001': MockProduct("Peaceful Tribute", 89.99),
    'MOCK-SY-002': MockProduct("Serenity Wreath", 129.99),
    'MOCK-SY-003': MockProduct("Comfort and Light Bouquet", 74.99),
    'MOCK-SY-004': MockProduct("Eternal Peace Lilies", 64.99),
    'MOCK-AN-001': MockProduct("Romance in Bloom", 99.99),
    'MOCK-AN-002': MockProduct("Years of Love Bouquet", 84.99),
    'MOCK-AN-003': MockProduct("Golden Anniversary Arrangement", 119.99),
    'MOCK-AN-004': MockProduct("Forever Yours Roses", 149.99),
    'MOCK-LR-001': MockProduct("Passionate Reds", 89.99),
    'MOCK-LR-002': MockProduct("Sweetheart Bouquet", 74.99),
    'MOCK-LR-003': MockProduct("Love Letter Arrangement", 69.99),
    'MOCK-LR-004': MockProduct("Dozen Red Roses", 99.99),
    'MOCK-GW-001': MockProduct("Cheerful Recovery", 59.99),
    'MOCK-GW-002': MockProduct("Sunny Get Well Wishes", 54.99),
    'MOCK-GW-003': MockProduct("Healing Garden Basket", 64.99),
    'MOCK-GW-004': MockProduct("Feel Better Blooms", 49.99),
    'MOCK-TY-001': MockProduct("Gratitude Bouquet", 59.99),
    'MOCK-TY-002': MockProduct("Appreciation Blooms", 54.99),
    'MOCK-TY-003': MockProduct("Thankful Heart Arrangement", 69.99),
    'MOCK-TY-004': MockProduct("Many Thanks Garden", 74.99),
    'MOCK-NB-001': MockProduct("Welcome Baby Bouquet", 64.99),
    'MOCK-NB-002': MockProduct("Baby Boy Blues", 59.99),
    'MOCK-NB-003': MockProduct("Baby Girl Pinks", 59.99),
    'MOCK-NB-004': MockProduct("Stork Delivery Basket", 79.99),
    'MOCK-JB-001': MockProduct("Simply Beautiful", 54.99),
    'MOCK-JB-002': MockProduct("Garden Delight", 49.99),
    'MOCK-JB-003': MockProduct("Thinking of You", 59.99),
    'MOCK-JB-004': MockProduct("Everyday Elegance", 64.99),
    'MOCK-PL-001': MockProduct("Peace Lily", 64.99),
    'MOCK-PL-002': MockProduct("Orchid Elegance", 79.99),
    'MOCK-PL-003': MockProduct("Succulent Garden", 49.99),
    'MOCK-PL-004': MockProduct("Fiddle Leaf Fig", 89.99),
    'MOCK-RO-001': MockProduct("Classic Dozen Roses", 89.99),
    'MOCK-RO-002': MockProduct("Two Dozen Roses", 149.99),
    'MOCK-RO-003': MockProduct("Rainbow Rose Bouquet", 79.99),
    'MOCK-RO-004': MockProduct("Premium Rose Box", 119.99),
    'MOCK-MX-001': MockProduct("Garden Splendor", 69.99),
    'MOCK-MX-002': MockProduct("Florist's Choice", 74.99),
    'MOCK-MX-003': MockProduct("Country Charm Basket", 64.99),
    'MOCK-MX-004': MockProduct("Luxury Mixed Bouquet", 99.99),
    'MOCK-PR-001': MockProduct("Luxe Rose & Orchid", 149.99),
    'MOCK-PR-002': MockProduct("Grand Celebration", 199.99),
    'MOCK-PR-003': MockProduct("Designer's Masterpiece", 179.99),
    'MOCK-PR-004': MockProduct("Ultimate Rose Collection", 299.99),
    'MOCK-VD-001': MockProduct("Valentine's Dozen Roses", 99.99),
    'MOCK-VD-002': MockProduct("Cupid's Arrow", 84.99),
    'MOCK-VD-003': MockProduct("Be Mine Bouquet", 109.99),
    'MOCK-VD-004': MockProduct("Sweet Romance", 129.99),
    'MOCK-MD-001': MockProduct("Mom's Garden Bouquet", 74.99),
    'MOCK-MD-002': MockProduct("Queen of Hearts", 89.99),
    'MOCK-MD-003': MockProduct("Mother's Love Orchid", 79.99),
    'MOCK-MD-004': MockProduct("Spring for Mom", 69.99),
    'MOCK-CH-001': MockProduct("Holiday Centerpiece", 79.99),
    'MOCK-CH-002': MockProduct("Christmas Poinsettia", 49.99),
    'MOCK-CH-003': MockProduct("Winter Wonderland", 89.99),
    'MOCK-CH-004': MockProduct("Holiday Joy Bouquet", 74.99),
    'MOCK-001': MockProduct("Garden Splendor Bouquet", 59.99),
    'MOCK-002': MockProduct("Vibrant Celebration", 69.99),
    'MOCK-003': MockProduct("Sunshine Meadow", 54.99),
    'MOCK-004': MockProduct("Classic Rose Dozen", 89.99),
    'MOCK-005': MockProduct("Spring Garden Basket", 74.99),
    'MOCK-006': MockProduct("Peaceful Lily", 64.99),
}


def get_mock_product(sku: str) -> MockProduct:
    """Unknown SKUs get a synthetic name and the default price."""
    return MOCK_PRODUCTS.get(sku) or MockProduct(f"Product {sku}", DEFAULT_MOCK_PRICE)
