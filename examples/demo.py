"""
snailcrypt — Live Demo: every envelope version
==============================================
Run:  python examples/demo.py            (offline, throwaway keys)
      python examples/demo.py --live     (real key release service)

Offline mode serves two generated keypairs from memory: one for a lockdate
in the past, one for a lockdate far in the future, so both the released
and the withheld case can be shown.
"""

import sys, os, time, logging
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric import rsa

from snailcrypt import (ClientVersion, SnailcryptError, StaticKeyProvider, VersionAnalyzer,
                        create_client, parse_envelope, parse_lockdate, timer_url)

LINE     = "═" * 70
MSG      = "Harvest later — this text unlocks at its lockdate."
PAST     = parse_lockdate("2022-11-19T17:00:00+0100")
FUTURE   = parse_lockdate("2999-01-01T00:00:00+0000")

def header(title):
    print(f"\n{LINE}")
    print(f"  {title}")
    print(LINE)

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")

def throwaway_keypair():
    priv = rsa.generate_private_key(public_exponent=65537, key_size=2048)
    pub_pem = priv.public_key().public_bytes(
        serialization.Encoding.PEM, serialization.PublicFormat.SubjectPublicKeyInfo).decode()
    priv_pem = priv.private_bytes(
        serialization.Encoding.PEM, serialization.PrivateFormat.PKCS8,
        serialization.NoEncryption()).decode()
    return pub_pem, priv_pem

# ─────────────────────────────────────────────────────────────────────────────
logging.basicConfig(level=logging.INFO, format=' %(name)s: %(message)s')
live = "--live" in sys.argv

if live:
    client = create_client()
else:
    client = create_client(key_provider=StaticKeyProvider({
        PAST:   throwaway_keypair(),
        FUTURE: throwaway_keypair(),
    }))

print(f"\n{LINE}")
print("  snailcrypt — Envelope Version Demo")
print(f"  Mode: {'live key release service' if live else 'offline, in-memory keys'}")
print(LINE)
print(f"  Message: {MSG}\n")

analyzer = VersionAnalyzer()
cases = [
    (ClientVersion.V1, "", ""),
    (ClientVersion.V2, "Open on launch day", ""),
    (ClientVersion.V3, "Quarterly numbers", "report.pdf"),
]

for version, hint, filename in cases:
    header(f"Version {version} — hint={hint!r} filename={filename!r}")
    t0 = time.perf_counter()
    envelope = client.encrypt(MSG, PAST, hint=hint, filename=filename)
    result   = client.decrypt(envelope)
    elapsed  = time.perf_counter() - t0
    parsed   = parse_envelope(envelope)
    ok("Detected version", str(analyzer.get_version(envelope)))
    ok("Envelope size",    f"{len(envelope)} chars, {len(parsed.cipher)} cipher bytes")
    ok("Lockdate",         client.lockdate_from_envelope(envelope).strftime(client.datetime_format()))
    ok("Round-trip",       f"{elapsed*1000:.2f} ms")
    ok("Decrypted",        result.plaintext)
    if result.hint:
        ok("Hint",         result.hint)
    if result.filename:
        ok("Filename",     result.filename)
    assert result.plaintext == MSG

# ── Withheld key ─────────────────────────────────────────────────────────────
header("Lockdate in the future — key withheld")
envelope = client.encrypt(MSG, FUTURE, hint="Not yet!")
try:
    client.decrypt(envelope)
except SnailcryptError as e:
    ok("Refused",          f"{type(e).__name__}: {e}")
    ok("Hint still shown", e.hint)
ok("Timer link", timer_url(envelope)[:60] + "...")

print(f"\n{LINE}")
print("  All versions: PASSED")
print(f"{LINE}\n")
