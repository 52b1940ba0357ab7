import json
import unittest
from unittest import mock

import requests

from contract_cloner.config import Settings
from contract_cloner.errors import FetchError, NotFoundError
from contract_cloner.fetcher import fetch_source, normalize_source, source_api_url

ADDR = "0x14Bdc3A3AE09f5518b923b69489CBcAfB238e617"

STANDARD_JSON = json.dumps({
    "language": "Solidity",
    "sources": {
        "contracts/Token.sol": {"content": "contract Token {}"},
        "@openzeppelin/contracts/token/ERC20/ERC20.sol": {"content": "contract ERC20 {}"},
    },
    "settings": {"remappings": ["@openzeppelin/=lib/openzeppelin-contracts/", "ds-test/=lib/ds-test/src/"]},
})


class TestNormalizeSource(unittest.TestCase):
    def test_standard_json(self):
        bundle = normalize_source(STANDARD_JSON, "Token", "sol")

        self.assertEqual(bundle.contract_name, "Token")
        self.assertEqual(bundle.files, {
            "contracts/Token.sol": "contract Token {}",
            "@openzeppelin/contracts/token/ERC20/ERC20.sol": "contract ERC20 {}",
        })
        self.assertEqual(bundle.remappings, [
            "@openzeppelin/=lib/openzeppelin-contracts/",
            "ds-test/=lib/ds-test/src/",
        ])

    def test_standard_json_without_settings(self):
        source = json.dumps({"sources": {"A.sol": {"content": "a"}}})
        bundle = normalize_source(source, "A", "sol")
        self.assertEqual(bundle.files, {"A.sol": "a"})
        self.assertIsNone(bundle.remappings)

    def test_empty_remappings_dropped(self):
        source = json.dumps({"sources": {"A.sol": {"content": "a"}}, "settings": {"remappings": []}})
        self.assertIsNone(normalize_source(source, "A", "sol").remappings)

    def test_null_remapping_becomes_empty_line(self):
        source = json.dumps({
            "sources": {"A.sol": {"content": "a"}},
            "settings": {"remappings": ["@x/=lib/x/", None]},
        })
        bundle = normalize_source(source, "A", "sol")
        self.assertEqual(bundle.remappings, ["@x/=lib/x/", ""])

    def test_flat_source_without_name_or_extension(self):
        bundle = normalize_source("contract X {}", None, None)
        self.assertEqual(bundle.files, {"UnknownContract.sol": "contract X {}"})

    def test_double_brace_wrapped_json(self):
        source = "{" + STANDARD_JSON + "}"
        bundle = normalize_source(source, "Token", "sol")
        self.assertIn("contracts/Token.sol", bundle.files)

    def test_flat_source(self):
        source = "pragma solidity ^0.8.0;\ncontract Flat {}\n"
        bundle = normalize_source(source, "Flat", "sol")
        self.assertEqual(bundle.files, {"Flat.sol": source})
        self.assertIsNone(bundle.remappings)

    def test_vyper_extension(self):
        bundle = normalize_source("# @version 0.3.7\n", "Vault", "vy")
        self.assertEqual(list(bundle.files), ["Vault.vy"])

    def test_json_without_sources_is_flat(self):
        source = json.dumps({"abi": []})
        bundle = normalize_source(source, "Odd", "sol")
        self.assertEqual(bundle.files, {"Odd.sol": source})


class TestFetchSource(unittest.TestCase):
    def setUp(self):
        self.settings = Settings()
        self.mock_get_patcher = mock.patch("contract_cloner.fetcher.requests.get")
        self.mock_get = self.mock_get_patcher.start()

    def tearDown(self):
        self.mock_get_patcher.stop()

    def _create_mock_response(self, payload, status_code=200):
        mock_response = mock.MagicMock()
        mock_response.status_code = status_code
        mock_response.json.return_value = payload
        return mock_response

    def test_request_shape(self):
        self.mock_get.return_value = self._create_mock_response(
            {"result": "contract A {}", "contractName": "A", "ext": "sol"}
        )

        fetch_source(ADDR, "137", self.settings)

        self.mock_get.assert_called_once_with(
            f"https://vscode.blockscan.com/srcapi/137/{ADDR}",
            headers={"accept": "application/json"},
            timeout=None,
        )

    def test_custom_host_and_timeout(self):
        settings = Settings(source_host="example.org", request_timeout=5.0)
        self.mock_get.return_value = self._create_mock_response(
            {"result": "contract A {}", "contractName": "A", "ext": "sol"}
        )

        fetch_source(ADDR, "ethereum", settings)

        args, kwargs = self.mock_get.call_args
        self.assertEqual(args[0], source_api_url("example.org", "ethereum", ADDR))
        self.assertEqual(kwargs["timeout"], 5.0)

    def test_plain_contract(self):
        self.mock_get.return_value = self._create_mock_response(
            {"result": STANDARD_JSON, "contractName": "Token", "ext": "sol"}
        )

        bundle = fetch_source(ADDR, "ethereum", self.settings)

        self.assertEqual(bundle.contract_name, "Token")
        self.assertEqual(len(bundle.files), 2)

    def test_proxy_uses_implementation(self):
        self.mock_get.return_value = self._create_mock_response({
            "result": "contract Proxy {}",
            "contractName": "Proxy",
            "ext": "sol",
            "proxyAddress": "0xeba675f1d0fe4c00e179c1f224b8b18dd476e76a",
            "proxyResult": "# @version 0.3.7\n",
            "proxyContractName": "Implementation",
            "proxyExt": "vy",
        })

        bundle = fetch_source(ADDR, "ethereum", self.settings)

        self.assertEqual(bundle.contract_name, "Implementation")
        self.assertEqual(bundle.files, {"Implementation.vy": "# @version 0.3.7\n"})

    def test_no_source(self):
        for payload in ({"result": "", "contractName": "", "ext": "sol"}, {}):
            self.mock_get.return_value = self._create_mock_response(payload)
            with self.assertRaises(NotFoundError):
                fetch_source(ADDR, "ethereum", self.settings)

    def test_proxy_without_implementation_source(self):
        self.mock_get.return_value = self._create_mock_response({
            "result": "contract Proxy {}",
            "proxyAddress": "0xeba675f1d0fe4c00e179c1f224b8b18dd476e76a",
            "proxyResult": "",
        })
        with self.assertRaises(NotFoundError):
            fetch_source(ADDR, "ethereum", self.settings)

    def test_http_error(self):
        self.mock_get.return_value = self._create_mock_response({}, status_code=502)
        with self.assertRaises(FetchError) as ctx:
            fetch_source(ADDR, "ethereum", self.settings)
        self.assertIn("502", str(ctx.exception))

    def test_invalid_json(self):
        response = self._create_mock_response(None)
        response.json.side_effect = ValueError("Expecting value")
        self.mock_get.return_value = response
        with self.assertRaises(FetchError):
            fetch_source(ADDR, "ethereum", self.settings)

    def test_connection_error(self):
        self.mock_get.side_effect = requests.ConnectionError("boom")
        with self.assertRaises(FetchError):
            fetch_source(ADDR, "ethereum", self.settings)


if __name__ == "__main__":
    unittest.main()
