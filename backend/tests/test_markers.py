"""Product marker extraction tests."""
from chat_client.markers import ProductReference, parse_message_content


class TestParseMessageContent:
    """parse_message_content tests."""

    def test_image_price_markdown_link(self):
        parsed = parse_message_content("Imagine: https://x/a.jpg\nPreț: 25 RON\n[Titlu](https://x/p)")

        assert parsed.products == [
            ProductReference(url="https://x/p", title="Titlu", price="25 RON", image="https://x/a.jpg")
        ]
        assert "Imagine:" not in parsed.clean_content
        assert "[Titlu](https://x/p)" in parsed.clean_content

    def test_full_template(self):
        text = (
            "Iată ce am găsit:\n\n"
            "1. **Miere de salcâm** 🛍️\n"
            "   🖼️ Imagine: https://stupina.ro/m.jpg\n"
            "   🔗 Link: https://stupina.ro/miere\n"
            "   💰 Preț: 45,50 Lei\n"
            "\n"
            "2. **Cană din lut** 🛍️\n"
            "   💰 Pret: 30 RON\n"
            "   🔗 Link: https://olarie.ro/cana\n"
        )

        parsed = parse_message_content(text)

        assert parsed.products == [
            ProductReference(url="https://stupina.ro/miere", price="45,50 Lei", image="https://stupina.ro/m.jpg"),
            ProductReference(url="https://olarie.ro/cana", price="30 RON"),
        ]
        assert "stupina.ro/m.jpg" not in parsed.clean_content

    def test_second_product_not_contaminated(self):
        text = (
            "**Imagine**: https://a.ro/1.png\n"
            "Preț: 10 RON\n"
            "[Unu](https://a.ro/1)\n"
            "[Doi](https://b.ro/2)\n"
        )

        first, second = parse_message_content(text).products

        assert first.image == "https://a.ro/1.png"
        assert second == ProductReference(url="https://b.ro/2", title="Doi")

    def test_image_links_are_not_products(self):
        parsed = parse_message_content("[poza](https://a.ro/p.JPG?w=200)\n[Produs](https://a.ro/produs)")
        assert [p.url for p in parsed.products] == ["https://a.ro/produs"]

    def test_link_line_deduplicated_against_markdown(self):
        parsed = parse_message_content("[Cana](https://a.ro/cana)\nLink: https://a.ro/cana")
        assert parsed.products == [ProductReference(url="https://a.ro/cana", title="Cana")]

    def test_image_out_of_window(self):
        text = "Imagine: https://a.ro/i.jpg\n1\n2\n3\n4\n5\nLink: https://a.ro/p"
        assert parse_message_content(text).products[0].image is None

    def test_image_url_trailing_bracket_trimmed(self):
        parsed = parse_message_content("(Imagine: https://a.ro/i.jpg)\n[X](https://a.ro/x)")
        assert parsed.products[0].image == "https://a.ro/i.jpg"

    def test_blank_runs_collapsed(self):
        parsed = parse_message_content("Salut\n\nImagine: https://a.ro/i.jpg\n\n\nGata\n")
        assert parsed.clean_content == "Salut\n\nGata"

    def test_plain_text(self):
        parsed = parse_message_content("Bună! Ce cauți azi?")
        assert parsed.products == []
        assert parsed.clean_content == "Bună! Ce cauți azi?"

    def test_price_after_link_stays_with_its_product(self):
        text = (
            "1. **Miere** 🛍️\n"
            "   🖼️ Imagine: https://stupina.ro/m.jpg\n"
            "   🔗 Link: https://stupina.ro/miere\n"
            "   💰 Preț: 45 RON\n"
            "\n"
            "2. **Cană** 🛍️\n"
            "   🔗 Link: https://olarie.ro/cana\n"
        )

        first, second = parse_message_content(text).products

        assert first == ProductReference(url="https://stupina.ro/miere", price="45 RON", image="https://stupina.ro/m.jpg")
        assert second == ProductReference(url="https://olarie.ro/cana")

    def test_image_does_not_cross_list_items(self):
        text = (
            "1. **Miere**\n"
            "Imagine: https://stupina.ro/m.jpg\n"
            "2. **Cană**\n"
            "Link: https://olarie.ro/cana\n"
        )

        assert parse_message_content(text).products[0].image is None
