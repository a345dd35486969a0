import base64
import io
import struct

import openpyxl
import pytest

from models.table_session import TableSession


def to_b64(content) -> str:
    if isinstance(content, str):
        content = content.encode("utf-8")
    return base64.b64encode(content).decode("ascii")


def xlsx_bytes(sheets) -> bytes:
    """sheets: lista de (nombre, filas)."""
    wb = openpyxl.Workbook()
    wb.remove(wb.active)
    for name, rows in sheets:
        ws = wb.create_sheet(title=name)
        for row in rows:
            ws.append(row)
    buf = io.BytesIO()
    wb.save(buf)
    return buf.getvalue()


def _biff_record(opcode, data=b""):
    return struct.pack("<HH", opcode, len(data)) + data


def _biff_bof(stream_type):
    # BIFF8, build/año arbitrarios
    return _biff_record(0x0809, struct.pack("<HHHHII", 0x0600, stream_type, 0x0DBB, 0x07CC, 0, 0x06))


def _ole_dir_entry(name, etype, child, start, size):
    raw = name.encode("utf-16-le") + b"\x00\x00" if name else b""
    return (raw.ljust(64, b"\x00")
            + struct.pack("<HBBiii", len(raw), etype, 1, -1, -1, child)
            + b"\x00" * 36
            + struct.pack("<iII", start, size, 0))


def xls_bytes(rows, sheet_name="Hoja1") -> bytes:
    """
    Libro Excel 97-2003 mínimo: una hoja BIFF8 (SST + LABELSST + NUMBER)
    dentro de un contenedor OLE2 con sectores de 512 bytes.
    """
    strings = []
    cells = b""
    for r, row in enumerate(rows):
        for c, value in enumerate(row):
            if value is None:
                continue
            if isinstance(value, str):
                if value not in strings:
                    strings.append(value)
                cells += _biff_record(0x00FD, struct.pack("<HHHi", r, c, 0, strings.index(value)))
            else:
                cells += _biff_record(0x0203, struct.pack("<HHHd", r, c, 0, float(value)))
    ncols = max((len(row) for row in rows), default=0)
    sheet = (_biff_bof(0x0010)
             + _biff_record(0x0200, struct.pack("<IIHHH", 0, len(rows), 0, ncols, 0))
             + cells
             + _biff_record(0x000A))

    sst = struct.pack("<ii", len(strings), len(strings))
    for s in strings:
        sst += struct.pack("<HB", len(s), 1) + s.encode("utf-16-le")

    def _globals(sheet_offset):
        name = sheet_name.encode("utf-16-le")
        return (_biff_bof(0x0005)
                + _biff_record(0x0042, struct.pack("<H", 1200))
                + _biff_record(0x00E0, b"\x00" * 20)
                + _biff_record(0x0085, struct.pack("<IBBBB", sheet_offset, 0, 0, len(sheet_name), 1) + name)
                + _biff_record(0x00FC, sst)
                + _biff_record(0x000A))

    stream = _globals(len(_globals(0))) + sheet
    # Menos de 4096 bytes iría al mini stream; se rellena hasta sectores completos
    n_sectors = max(8, -(-len(stream) // 512))
    stream = stream.ljust(n_sectors * 512, b"\x00")

    # Sector 0: FAT, sector 1: directorio, sectores 2..: "Workbook"
    fat = [-3, -2]
    last = 1 + n_sectors
    for s in range(2, last + 1):
        fat.append(s + 1 if s < last else -2)
    fat += [-1] * (128 - len(fat))

    directory = (_ole_dir_entry("Root Entry", 5, 1, -2, 0)
                 + _ole_dir_entry("Workbook", 2, -1, 2, len(stream))
                 + _ole_dir_entry("", 0, -1, -1, 0) * 2)

    header = (b"\xd0\xcf\x11\xe0\xa1\xb1\x1a\xe1" + b"\x00" * 16
              + struct.pack("<HHHHH", 0x003E, 0x0003, 0xFFFE, 9, 6)
              + b"\x00" * 6
              + struct.pack("<iiiiiiiii", 0, 1, 1, 0, 4096, -2, 0, -2, 0)
              + struct.pack("<109i", 0, *([-1] * 108)))
    return header + struct.pack("<128i", *fat) + directory + stream


PEOPLE_CSV ="Name,Age\nBob,30\nAnn,25\n"


@pytest.fixture
def session():
    return TableSession()


@pytest.fixture
def people(session):
    session.load(to_b64(PEOPLE_CSV))
    return session
