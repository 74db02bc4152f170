import pytest

# Smallest valid PNG: signature + IHDR + IDAT + IEND for a 1x1 grey pixel.
_ONE_PIXEL_PNG = bytes.fromhex(
    "89504e470d0a1a0a0000000d4948445200000001000000010800000000"
    "3a7e9b550000000a49444154789c63600000000200015c6dab0e0000000049454e44ae426082"
)


@pytest.fixture()
def png_bytes() -> bytes:
    """A tiny PNG image; its pixels are irrelevant to the mocked providers."""
    return _ONE_PIXEL_PNG


@pytest.fixture()
def form_text() -> str:
    """OCR text of a fully filled printing request form."""
    return (
        "PRINTING REQUEST FORM\n"
        "RECEIVED DATE: 15/11/2025\n"
        "Class: 5A\n"
        "Subject: Mathematics\n"
        "Teacher in charge: Mr. Smith\n"
        "No. of pages (original copy): 5\n"
        "No. of copies: 30\n"
        "Total No. of printed pages: 150\n"
        "For office use: (X) Ricoh   Toshiba\n"
    )
