import pytest

from salads import build_salad_table
from vendor_data import build_reference_index

MAPPING_HEADER = [
    "Sr No", "Product Name mod", "Product List og", "Quantity / Units",
    "Vendor", "Vendor_details", "Phone", "Lang", "Hindi Product Name",
]

MAPPING_ROWS = [
    MAPPING_HEADER,
    [1, "Tomato Desi", "Tomato (Desi) - 500g", "500 gms", "Andheri", "Adil", "919800000001", "Hindi", "टमाटर"],
    [2, "Banana Elaichi", "Elaichi Big Banana 6pcs", "6 pcs", "Anderi", "", "", "", "केला"],
    [3, "Coriander", "Coriander Bunch", "1 bunch", "Dadar", "Ramesh", "919800000002", "English", ""],
    [4, "Cherry Tomato Red", "", "250 gms", "Dadar", "Ramesh", "", "English", ""],
    [5, "Microgreen Subscription", "", "4 packs", "Vashi", "Sunil", "919800000003", "English", ""],
    [6, "Lettuce Iceberg", "", "1 kg", "Vashi", "Sunil", "", "English", ""],
]

SALAD_ROWS = [
    ["#", "Salad", "Ingredient", "Qty (g)", "Vendor"],
    [1, "Greek Salad", "Lettuce", "50", "Andheri"],
    [None, None, "Feta", "20 g", "Dadar hindi"],
    [None, None, None, None, None],
    [None, None, "Orphan", "10", "Vashi"],
    [2, "Fruit Bowl", "Banana", "abc", "anderhi"],
]

ORDER_HEADER = ["Order #", "Customer", "Product", "Qty"]


@pytest.fixture
def mapping_rows():
    return [list(r) for r in MAPPING_ROWS]


@pytest.fixture
def salad_rows():
    return [list(r) for r in SALAD_ROWS]


@pytest.fixture
def index(mapping_rows):
    return build_reference_index(mapping_rows)


@pytest.fixture
def salads(salad_rows):
    return build_salad_table(salad_rows)


@pytest.fixture
def order_rows():
    def make(*lines):
        return [ORDER_HEADER] + [["1001", "Priya", name, qty] for name, qty in lines]
    return make
