"""
Extraction of product references from assistant text.

The assistant is prompted to describe each product with an image line,
a price line and a link. A blank line or a numbered list item starts a
new product block; price and image never cross a block boundary.
`parse_message_content` is a pure function of the full text so it can
be re-run on every streamed delta.
"""
import re
from dataclasses import dataclass, field, replace
from typing import Dict, List, Optional

IMAGE_PATTERNS = [
    re.compile(r'🖼️\s*Imagine:\s*(https?://[^\s)]+)', re.IGNORECASE),
    re.compile(r'Imagine:\s*(https?://[^\s)]+)', re.IGNORECASE),
    re.compile(r'\*\*Imagine\*\*:\s*(https?://\S+)', re.IGNORECASE),
]

CLEAN_PATTERNS = [
    re.compile(r'🖼️\s*Imagine:\s*https?://\S+', re.IGNORECASE),
    re.compile(r'Imagine:\s*https?://\S+', re.IGNORECASE),
    re.compile(r'\*\*Imagine\*\*:\s*https?://\S+', re.IGNORECASE),
]

PRICE_PATTERN = re.compile(r'(?:💰\s*)?Pre[țt]:\s*([0-9.,]+\s*(?:RON|Lei|EUR|€)?)', re.IGNORECASE)
MARKDOWN_LINK_PATTERN = re.compile(r'\[([^\]]+)\]\((https?://[^\s)]+)\)')
LINK_LINE_PATTERN = re.compile(r'(?:🔗\s*)?Link:\s*(https?://\S+)', re.IGNORECASE)
IMAGE_FILE_PATTERN = re.compile(r'\.(jpg|jpeg|png|webp|gif)(\?|$)', re.IGNORECASE)
BLANK_RUN_PATTERN = re.compile(r'\n\s*\n\s*\n')
LIST_ITEM_PATTERN = re.compile(r'^\s*\d+\.\s')

# An image belongs to a link at most this many lines below it
IMAGE_WINDOW = 4


@dataclass(frozen=True)
class ProductReference:
    url: str
    title: Optional[str] = None
    price: Optional[str] = None
    image: Optional[str] = None


@dataclass(frozen=True)
class ParsedMessage:
    clean_content: str
    products: List[ProductReference] = field(default_factory=list)


def _find_images(lines: List[str]) -> Dict[int, str]:
    images = {}
    for index, line in enumerate(lines):
        for pattern in IMAGE_PATTERNS:
            match = pattern.search(line)
            if match:
                images[index] = match.group(1).rstrip(')]')
                break
    return images


def clean_message_content(content: str) -> str:
    """Drop image marker lines, which are rendered as thumbnails instead."""
    cleaned = content
    for pattern in CLEAN_PATTERNS:
        cleaned = pattern.sub('', cleaned)
    return BLANK_RUN_PATTERN.sub('\n\n', cleaned).strip()


def parse_message_content(content: str) -> ParsedMessage:
    lines = content.split('\n')
    images = _find_images(lines)
    products: List[ProductReference] = []
    seen_urls = set()
    consumed_images = set()

    current_price = None
    current_image = None
    current_image_line = None
    block_start = 0
    # Product taken in the current block, if any
    block_product = None

    def take(url, title=None):
        nonlocal current_price, current_image, current_image_line, block_product
        products.append(ProductReference(url=url, title=title, price=current_price, image=current_image))
        seen_urls.add(url)
        block_product = len(products) - 1
        if current_image_line is not None:
            consumed_images.add(current_image_line)
        # Next product starts clean
        current_price = None
        current_image = None
        current_image_line = None

    for index, line in enumerate(lines):
        if not line.strip() or LIST_ITEM_PATTERN.match(line):
            current_price = None
            block_start = index
            block_product = None

        has_link = bool(MARKDOWN_LINK_PATTERN.search(line) or LINK_LINE_PATTERN.search(line))
        price_match = PRICE_PATTERN.search(line)
        if price_match:
            price = price_match.group(1).strip()
            if not has_link and block_product is not None and products[block_product].price is None:
                # Price written after the link of the same block
                products[block_product] = replace(products[block_product], price=price)
            else:
                current_price = price

        current_image = None
        current_image_line = None
        for candidate in range(index, max(block_start, index - IMAGE_WINDOW) - 1, -1):
            if candidate in images and candidate not in consumed_images:
                current_image = images[candidate]
                current_image_line = candidate
                break

        for match in MARKDOWN_LINK_PATTERN.finditer(line):
            url = match.group(2)
            if IMAGE_FILE_PATTERN.search(url):
                continue
            take(url, match.group(1))

        for match in LINK_LINE_PATTERN.finditer(line):
            url = match.group(1)
            if url in seen_urls:
                continue
            take(url)

    return ParsedMessage(clean_content=clean_message_content(content), products=products)
