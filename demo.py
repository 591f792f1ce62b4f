from gpgid import IdentityEngine, create_identity, decrypt
from gpgid.logger import get_logger
import os
import tempfile

get_logger()

print("--- gpgid Live Demo ---")

with tempfile.TemporaryDirectory() as workdir:
    # 1. Admin publishes a public key
    admin = create_identity("Admin", email="admin@example.com")
    admin_path = os.path.join(workdir, "admin.gpg")
    with open(admin_path, "wb") as fh:
        fh.write(admin.export_public_key())
    print(f"[+] Admin key written: {admin.key_id}")

    # 2. Initialize Engine (creates and self-signs Alice, imports admin)
    engine = IdentityEngine("Alice", "alice@example.com", admin_key_path=admin_path)
    print(f"[+] Identity created: {engine.identity.userids[0]} ({engine.identity.key_id})")
    print(f"[+] Admin trusted: {engine.has_admin}")

    # 3. Export public key
    pub_path = engine.export_public_key(workdir)
    print(f"[+] Public key exported to {os.path.basename(pub_path)}")

    # 4. Write message for admin
    msg_path = engine.write_to_admin("Server rotated, new key attached.", workdir)
    print(f"[+] Message written to {os.path.basename(msg_path)}")

    # 5. Admin reads it
    with open(msg_path) as fh:
        result = decrypt(admin, fh.read())
    print(f"[+] Admin decrypted: {result.plaintext!r}")
    print(f"    - Signed by Alice: {result.verify_sender(engine.identity)}")

print("--- Demo Complete ---")
