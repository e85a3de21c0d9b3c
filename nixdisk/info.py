"""
Disk information reports for Nixdorf 8820 disk images.

get_*_info() functions return JSON-friendly dictionaries; format_*()
functions render them as the label listings printed by the CLI.
"""

from typing import Any

from .image import DiskImage
from .models import (
    ErrorMapDescriptor,
    FileHeader,
    VolumeDescriptor,
    VolumeHeaderRecord,
)


def get_volume_info(volume: VolumeDescriptor) -> dict[str, Any]:
    return {
        'identifier': volume.identifier,
        'accessibility': volume.accessibility,
        'owner': volume.owner,
        'surface': str(volume.surface),
        'record_length': volume.sector_size,
        'record_length_code': volume.record_length.raw,
        'sector_sequence': volume.sequence,
        'allocation': str(volume.allocation),
        'version': volume.version,
    }


def get_error_map_info(error_map: ErrorMapDescriptor) -> dict[str, Any]:
    return {
        'defective_cylinder1': error_map.defective_cylinder1,
        'defective_cylinder2': error_map.defective_cylinder2,
        'relocation': error_map.relocation,
        'error_directory_indicator': error_map.error_directory_indicator,
        'error_directory': error_map.error_directory,
    }


def get_header_info(header: VolumeHeaderRecord) -> dict[str, Any]:
    return {
        'identifier': header.identifier,
        'block_length': header.block_length,
        'extent_begin': str(header.extent_begin),
        'extent_end': str(header.extent_end),
        'record_format': header.record_format,
        'bypass': header.bypass,
        'accessibility': header.accessibility,
        'write_protect': header.write_protect,
        'interchange': header.interchange,
        'multivolume': header.multivolume,
        'section': header.section,
        'creation_date': str(header.creation_date),
        'record_length': header.record_length,
        'next_record_offset': header.next_record_offset,
        'attribute': header.attribute,
        'organization': header.organization,
        'expiration_date': str(header.expiration_date),
        'verify': header.verify,
        'end_of_data': str(header.end_of_data),
    }


def get_file_header_info(header: FileHeader) -> dict[str, Any]:
    info = {
        'name': header.name,
        'file_set_id': header.file_set_id,
        'section': header.section,
        'sequence': header.sequence,
        'generation': header.generation,
        'generation_version': header.generation_version,
        'creation_date': str(header.creation_date),
        'expiration_date': str(header.expiration_date),
        'accessibility': header.accessibility,
        'block_count': header.block_count,
        'implementation_id': header.implementation_id,
        'u': header.u,
        'record_size': header.record_size,
        'start': header.start,
        'start_offset': header.sector_offset(header.start),
        'next_header': header.next_header,
        'end': header.end,
        'end_offset': header.sector_offset(header.end),
        'last_sector_bytes': header.last_sector_bytes,
        'length': header.length,
        'header_offset': header.offset,
        'back_scanned': header.back_scanned,
        'trailer': None,
    }
    if header.trailer is not None:
        info['trailer'] = {
            'kind': header.trailer.kind.value,
            'identifier': header.trailer.identifier,
            'date1': str(header.trailer.date1 or ''),
            'date2': str(header.trailer.date2 or ''),
        }
    return info


def get_disk_info(disk: DiskImage) -> dict[str, Any]:
    """
    Get information about a disk image.

    Returns:
        Dictionary with the volume label, error map, index cylinder
        headers and directory statistics
    """
    entries = disk.list_directory()
    return {
        'image': disk.image_path,
        'size': disk.size,
        'volume': get_volume_info(disk.volume_descriptor),
        'error_map': get_error_map_info(disk.error_map),
        'headers': [get_header_info(h) for h in disk.headers],
        'directory': {
            'entries': len(entries),
            'system_entries': sum(1 for e in entries if e.is_system),
            'skipped_entries': len(disk.directory.skipped),
            'base_sector': disk.directory.base_sector,
            'start_offset': disk.directory.start_offset,
        },
    }


def format_volume(info: dict[str, Any]) -> str:
    access = info['accessibility']
    lines = [
        "Volume",
        f"    Volume Identifier                 {info['identifier']!r}",
        f"    Volume Accessibility Indicator    {repr(access) if access else '- unrestricted -'}",
        f"    Owner                             {info['owner']!r}",
        f"    Surface Indicator                 {info['surface']}",
        f"    Physical Record Length Identifier {info['record_length'] or repr(info['record_length_code'])}"
        f" bytes per physical record",
        f"    Sector Sequence Indicator         {info['sector_sequence']}",
        f"    File Label Allocation             {info['allocation']}",
        f"    Label Standard Version            {info['version']!r}",
    ]
    return '\n'.join(lines)


def format_error_map(info: dict[str, Any]) -> str:
    lines = [
        "Error map",
        f"    Defective Cylinder 1             {info['defective_cylinder1']}",
        f"    Defective Cylinder 2             {info['defective_cylinder2']}",
        f"    Alternative Relocation Indicator {info['relocation']}",
        f"    Error Directory Indicator        {info['error_directory_indicator']}",
        f"    Error Directory                  {info['error_directory']}",
    ]
    return '\n'.join(lines)


_HEADER_LABELS = (
    ('identifier', 'File Identifier'),
    ('block_length', 'Block Length'),
    ('extent_begin', 'Begin of Extent'),
    ('extent_end', 'End of Extent'),
    ('record_format', 'Record Format'),
    ('bypass', 'Bypass Indicator'),
    ('accessibility', 'File Accessibility'),
    ('write_protect', 'Write Protect'),
    ('interchange', 'Interchange Type'),
    ('multivolume', 'Multivolume Indicator'),
    ('section', 'File Section Number'),
    ('creation_date', 'Creation Date'),
    ('record_length', 'Record Length'),
    ('next_record_offset', 'Offset to Next Record Space'),
    ('attribute', 'Record Attribute'),
    ('organization', 'File Organization'),
    ('expiration_date', 'Expiration Date'),
    ('verify', 'Verify/Copy Indicator'),
    ('end_of_data', 'End of Data'),
)


def format_header(info: dict[str, Any]) -> str:
    lines = ["Header"]
    for key, label in _HEADER_LABELS:
        lines.append(f"    {label:<27} {info[key]}")
    return '\n'.join(lines)


def format_file_header(info: dict[str, Any]) -> str:
    lines = [
        "FileHeader1",
        f"    Name               {info['name']}",
        f"    File Set           {info['file_set_id']}",
        f"    Section/Sequence   {info['section']}/{info['sequence']}",
        f"    Generation         {info['generation']}.{info['generation_version']}",
        f"    Created            {info['creation_date']}",
        f"    Expires            {info['expiration_date']}",
        f"    Accessibility      {info['accessibility']}",
        f"    Block Count        {info['block_count']}",
        f"    Implementation     {info['implementation_id']}",
        "FileHeader2",
        f"    u                  {info['u']}",
        f"    Record Size        {info['record_size']}",
        f"    Start              {info['start']} (0x{info['start_offset']:x})",
        f"    Next Header        {info['next_header']}",
        f"    End                {info['end']} (0x{info['end_offset']:x})",
        f"    Bytes in Last      {info['last_sector_bytes']}",
        f"    Computed Length    {info['length']}",
    ]
    if info['back_scanned']:
        lines.append(f"    Header found {info['back_scanned']} sector(s) early "
                     f"at 0x{info['header_offset']:x}")
    trailer = info['trailer']
    if trailer is not None:
        lines.append(f"Trailer ({trailer['kind']})")
        if trailer['date1'] or trailer['date2']:
            lines.append(f"    Date1              {trailer['date1']}")
            lines.append(f"    Date2              {trailer['date2']}")
    return '\n'.join(lines)


def format_disk_info(info: dict[str, Any], verbose: bool = False) -> str:
    """
    Format disk information as a human-readable string.

    Args:
        info: Dictionary from get_disk_info()
        verbose: Whether to include the error map and every header

    Returns:
        Formatted string
    """
    lines = [format_volume(info['volume'])]
    directory = info['directory']
    lines.append(f"{len(info['headers'])} Headers")
    lines.append(f"{directory['entries']} Directory entries"
                 f" ({directory['system_entries']} system)")
    if directory['skipped_entries']:
        lines.append(f"{directory['skipped_entries']} unreadable directory entries skipped")

    if verbose:
        lines.append(format_error_map(info['error_map']))
        for header in info['headers']:
            lines.append(format_header(header))
        if directory['start_offset'] is not None:
            lines.append(f"Directory at 0x{directory['start_offset']:x}, "
                         f"base sector {directory['base_sector']}")

    return '\n'.join(lines)
