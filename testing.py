"""Quick smoke tests that can be run without pytest."""
from extractor import extract_listing
from tables import render, to_csv_text


def test_extract_listing():
    html = """
    <span class="fpa-title__inner">Sample Car</span>
    <div class="cz-price"><span>€10,000</span></div>
    """
    record = extract_listing(html, "https://www.carzone.ie/fpa/1")
    assert record.name == "Sample Car"
    assert record.price == "€10,000"
    assert record.location == "N/A"
    assert '"€10,000"' in to_csv_text(render([record]).delimited_rows)
    print("test_extract_listing passed")


if __name__ == "__main__":
    test_extract_listing()
