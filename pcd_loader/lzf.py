from .errors import DecompressionError


def decompress_lzf(data, out_length: int) -> bytes:
    """
    Decompress an LZF stream into exactly `out_length` bytes.

    Control byte < 32: literal run of ctrl+1 bytes.
    Otherwise: back-reference, length = (ctrl >> 5) [+ extra byte if 7] + 2,
    distance = ((ctrl & 0x1f) << 8) + next byte + 1 behind the write cursor.
    """
    src = bytes(data)
    in_len = len(src)
    out = bytearray(out_length)
    ip = 0
    op = 0

    while ip < in_len:
        ctrl = src[ip]
        ip += 1

        if ctrl < 32:
            run = ctrl + 1
            if op + run > out_length:
                raise DecompressionError("Output buffer is not large enough")
            if ip + run > in_len:
                raise DecompressionError("Literal run past end of input")
            out[op:op + run] = src[ip:ip + run]
            ip += run
            op += run
            continue

        length = ctrl >> 5
        ref = op - ((ctrl & 0x1F) << 8) - 1
        if ip >= in_len:
            raise DecompressionError("Back-reference truncated")
        if length == 7:
            length += src[ip]
            ip += 1
            if ip >= in_len:
                raise DecompressionError("Back-reference truncated")
        ref -= src[ip]
        ip += 1
        length += 2

        if op + length > out_length:
            raise DecompressionError("Output buffer is not large enough")
        if ref < 0 or ref >= op:
            raise DecompressionError(f"Back-reference out of range (ref={ref}, pos={op})")

        if ref + length <= op:
            out[op:op + length] = out[ref:ref + length]
            op += length
        else:
            # overlapping copy repeats the last (op - ref) bytes
            for _ in range(length):
                out[op] = out[ref]
                op += 1
                ref += 1

    if op != out_length:
        raise DecompressionError(f"Decompressed {op} bytes, expected {out_length}")
    return bytes(out)
