import pytest

HEADER = [
    "// Auto-generated TypeScript types from OIP Arweave templates",
    "// Generated on 2024-01-01T00:00:00+00:00",
    "",
]


def make_blob(*blocks: str) -> str:
    return "\n".join(HEADER) + "\n" + "\n".join(blocks)


@pytest.fixture()
def blob_factory():
    return make_blob


@pytest.fixture()
def header() -> list[str]:
    return list(HEADER)


@pytest.fixture()
def foo_baz_blob() -> str:
    return make_blob(
        "export interface Foo {\n  bar: Baz;\n}\n",
        "export interface Baz {\n  x: string;\n}\n",
    )


@pytest.fixture()
def templates_payload() -> dict:
    return {
        "templates": [
            {
                "data": {
                    "template": "audio",
                    "fieldsInTemplate": {
                        "title": {"type": "string", "index": 0},
                        "duration": {"type": "uint64", "index": 1, "required": False},
                        "format": {"type": "enum", "index": 2},
                        "creator": {"type": "string", "index": 3},
                    },
                    "formatValues": ["mp3", {"code": "flac"}],
                },
                "oip": {"inArweaveBlock": 10, "didTx": "did:arweave:a1"},
            },
            {
                "data": {
                    "template": "post",
                    "fieldsInTemplate": {
                        "audioItems": {"type": "repeated dref", "index": 1},
                        "replyTo": {"type": "dref", "index": 0},
                        "tags": {"type": "repeated string", "index": 2},
                    },
                },
                "oip": {"inArweaveBlock": 11},
            },
            {
                "data": {
                    "template": "audio",
                    "fieldsInTemplate": {
                        "title": {"type": "string", "index": 0},
                        "bitrate": {"type": "uint32", "index": 1},
                    },
                },
                "oip": {"inArweaveBlock": 20},
            },
        ]
    }
