import re

import pytest

from wechat_app_pay.exceptions import SignError
from wechat_app_pay.sign import build_sign_string, verify_sign, wechat_gen_sign

KEY = "192006250b4c09247ec02edce69f6a2d"
VENDOR_PARAMS = {
    "appid": "wxd930ea5d5a258f4f",
    "mch_id": "10000100",
    "device_info": "1000",
    "body": "test",
    "nonce_str": "ibuaiVcKdpRxkhJA",
}


def test_vendor_vector_md5():
    assert wechat_gen_sign(KEY, VENDOR_PARAMS) == "9A0A8659F005D6984697E2CA0A9CF3B7"


def test_vendor_vector_hmac_sha256():
    sign = wechat_gen_sign(KEY, VENDOR_PARAMS, "HMAC-SHA256")
    assert sign == "6A9AE1657590FD6257D693A078E1C3E4BB6BA4DC30B23E0EE2496E54170DACD6"


def test_sign_string_sorted_with_key_appended():
    s = build_sign_string(KEY, VENDOR_PARAMS)
    assert s == (
        "appid=wxd930ea5d5a258f4f&body=test&device_info=1000&mch_id=10000100"
        "&nonce_str=ibuaiVcKdpRxkhJA&key=192006250b4c09247ec02edce69f6a2d"
    )


def test_sign_is_deterministic():
    assert wechat_gen_sign(KEY, VENDOR_PARAMS) == wechat_gen_sign(KEY, dict(VENDOR_PARAMS))


def test_existing_sign_field_is_ignored():
    with_sign = {**VENDOR_PARAMS, "sign": "WHATEVER"}
    assert wechat_gen_sign(KEY, with_sign) == wechat_gen_sign(KEY, VENDOR_PARAMS)


def test_empty_values_are_skipped():
    padded = {**VENDOR_PARAMS, "attach": "", "detail": None}
    assert wechat_gen_sign(KEY, padded) == wechat_gen_sign(KEY, VENDOR_PARAMS)


@pytest.mark.parametrize("sign_type", ["MD5", "HMAC-SHA256"])
def test_output_is_uppercase_hex(sign_type):
    sign = wechat_gen_sign("k", {"a": "中文", "b": 1}, sign_type)
    assert re.fullmatch(r"[0-9A-F]+", sign)


def test_empty_mapping_fails():
    with pytest.raises(SignError):
        wechat_gen_sign(KEY, {})
    with pytest.raises(SignError):
        wechat_gen_sign(KEY, {"sign": "ABC"})


def test_empty_key_fails():
    with pytest.raises(SignError):
        wechat_gen_sign("", VENDOR_PARAMS)


def test_unknown_sign_type_fails():
    with pytest.raises(SignError):
        wechat_gen_sign(KEY, VENDOR_PARAMS, "SHA1")


def test_verify_sign():
    signed = {**VENDOR_PARAMS, "sign": "9A0A8659F005D6984697E2CA0A9CF3B7"}
    assert verify_sign(KEY, signed)
    assert not verify_sign(KEY, {**signed, "body": "tampered"})
    assert not verify_sign(KEY, VENDOR_PARAMS)


def test_verify_sign_uses_sign_type_field():
    params = {**VENDOR_PARAMS, "sign_type": "HMAC-SHA256"}
    params["sign"] = wechat_gen_sign(KEY, params, "HMAC-SHA256")
    assert verify_sign(KEY, params)
