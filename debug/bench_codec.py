#!/usr/bin/env python3
"""Quick codec throughput benchmark - direct timing only"""
import io
import os
import time


PAYLOAD = os.urandom(4 * 1024 * 1024)
PASSWORD = b"correct-horse"


def bench_encrypt():
    import tavol

    start = time.perf_counter()
    blob = tavol.encrypt_bytes(PAYLOAD, PASSWORD)
    elapsed = time.perf_counter() - start
    return elapsed, blob


def bench_decrypt(blob):
    import tavol

    out = io.BytesIO()
    start = time.perf_counter()
    tavol.decrypt_stream(io.BytesIO(blob), out, PASSWORD)
    elapsed = time.perf_counter() - start
    return elapsed, out.getvalue()


def main():
    mib = len(PAYLOAD) / (1024 * 1024)
    print(f"Benchmarking tavol codec on {mib:.0f} MiB...\n")

    enc_time, blob = bench_encrypt()
    print(f"  Encrypt: {enc_time:.3f}s ({mib / enc_time:.2f} MiB/s)")
    print(f"  Output size: {len(blob)} bytes")

    dec_time, plain = bench_decrypt(blob)
    print(f"  Decrypt: {dec_time:.3f}s ({mib / dec_time:.2f} MiB/s)")

    if plain != PAYLOAD:
        raise SystemExit("❌ Round trip mismatch")
    print("\n✅ Benchmark complete")


if __name__ == '__main__':
    main()
