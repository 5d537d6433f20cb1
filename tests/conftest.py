"""Shared test fixtures."""

import pytest

from pykeypath import Decoder, Encoder
from pykeypath._containers import DecodingOptions, EncodingOptions

PROPOSAL_PAYLOAD = b"""{
  "id" : "SE-0274",
  "title" : "Concise magic file names",
  "metadata" : {
    "review_start_date" : "2020-01-08T00:00:00Z",
    "review_end_date" : "2020-01-16T00:00:00Z"
  }
}"""


@pytest.fixture
def proposal_payload():
    return PROPOSAL_PAYLOAD


@pytest.fixture
def snake_case_decoder():
    return Decoder(key_decoding_strategy="convert_from_snake_case", date_decoding_strategy="iso8601")


@pytest.fixture
def snake_case_encoder():
    return Encoder(
        key_encoding_strategy="convert_to_snake_case",
        date_encoding_strategy="iso8601",
        pretty_printed=True,
    )


@pytest.fixture
def decoding_options():
    return DecodingOptions()


@pytest.fixture
def encoding_options():
    return EncodingOptions()
