"""
stat_cipher — Live Demo
=======================
Run:  python examples/demo.py

Encrypts a message with three units, prints every block with its
colour triples, paints the swatch sheet, then decrypts from the sheet
alone.
"""

import sys, os, io, logging
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from stat_cipher import CipherSession, SwatchSheet, UnitCatalog, format_bytes, to_hex

LINE = "═" * 70
UNITS = """id,name_zh,hp,atk,def,spa,spd,spe,icon_emoji,role
1,Bulbasaur,45,49,49,65,65,45,B,grass
4,Charmander,39,52,43,60,50,65,C,fire
7,Squirtle,44,48,65,50,64,43,S,water
25,Pikachu,35,55,40,50,50,90,P,electric
"""

def ok(label, value=""):
    print(f"  ✓  {label}{f': {value}' if value else ''}")


if __name__ == "__main__":
    logging.basicConfig(level=logging.INFO, format=' %(message)s')

    catalog = UnitCatalog.from_csv(io.StringIO(UNITS))
    session = CipherSession()

    print(f"\n{LINE}")
    print("  stat_cipher — Demo")
    print(LINE)

    needed = session.set_plaintext("Meet at the gym, 6pm")
    for unit_id in (7, 1, 4, 25)[:needed]:
        session.toggle(catalog.get(unit_id))

    blocks = session.encrypt()
    for i, b in enumerate(blocks):
        print(f"\n  Block {i + 1}  unit #{b.key_index:03d} {b.unit_name}  shift={b.shift}")
        ok("Plaintext", repr(b.block))
        ok("Cipher   ", format_bytes(b.cipher_bytes))
        ok("Colours  ", f"{to_hex(b.triple1)}  {to_hex(b.triple2)}")

    sheet = SwatchSheet()
    png = sheet.render([(b.triple1, b.triple2) for b in blocks])
    print()
    ok("Swatch sheet", f"{len(png)} bytes PNG")

    recovered = session.codec.decrypt_from_triples(sheet.read(png), session.selected)
    ok("Decrypted from colours", recovered)
    ok("Round-trip", str(session.verify()))
    print(LINE + "\n")
