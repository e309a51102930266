"""
Path segment algebra.

A path is held as a list of segments, the segments of the path text split on '/'. An absolute path starts with an
empty segment, so '/a/b' is ['', 'a', 'b'], '/a/' is ['', 'a', ''] and the empty path is [].
"""
from typing import List

Segments = List[str]


def split(path: str) -> Segments:
    if not path:
        return []
    return path.split("/")


def join(segments: Segments) -> str:
    return "/".join(segments)


def is_absolute(segments: Segments) -> bool:
    return len(segments) > 1 and segments[0] == ""


def remove_dot_segments(segments: Segments) -> Segments:
    """
    Remove the '.' and '..' segments of a path (RFC 3986 section 5.2.4).

    A '..' never climbs above the root, and a path ending in a dot segment keeps its trailing slash. Leading dot
    segments of a rootless path are dropped. A '..' that removes the first segment of a rootless path leaves the
    rest rooted, so 'b/..' becomes '/' and 'b/../d' becomes '/d'.

    :param segments: The path segments.
    :return: A new list of segments.
    """
    rooted = is_absolute(segments)
    if rooted:
        remaining = segments[1:]
    else:
        remaining = list(segments)
        while remaining and remaining[0] in (".", ".."):
            remaining.pop(0)
        if remaining == [""]:
            return []
        if is_absolute(remaining):
            rooted = True
            remaining = remaining[1:]
    output: Segments = []
    last = len(remaining) - 1
    for i, segment in enumerate(remaining):
        if segment == ".":
            if i == last:
                output.append("")
        elif segment == "..":
            if output:
                output.pop()
                rooted = rooted or not output
            if i == last:
                output.append("")
        else:
            output.append(segment)
    if rooted:
        return [""] + (output or [""])
    return output


def merge(base: Segments, ref: Segments, base_has_authority: bool) -> Segments:
    """
    Merge a relative reference path with the path of its base (RFC 3986 section 5.2.3).
    """
    if base_has_authority and not base:
        return [""] + ref
    return base[:-1] + ref


def append_segment(segments: Segments, segment: str) -> Segments:
    """
    Append one segment; a trailing empty segment (a path ending in '/') is replaced.
    """
    result = list(segments)
    if len(result) > 1 and result[-1] == "":
        result.pop()
    result.append(segment)
    return result


def append_path(segments: Segments, path: str) -> Segments:
    """
    Append the segments of a path string. Dot segments are kept as they are.
    """
    extra = split(path)
    if is_absolute(extra) and segments:
        extra = extra[1:]
    result = list(segments)
    if extra and len(result) > 1 and result[-1] == "":
        result.pop()
    result.extend(extra)
    return result


def drop_current_segments(segments: Segments) -> Segments:
    """
    Drop the '.' segments followed by another segment, the only dot segments that can be removed from a relative
    reference without changing what it resolves to.
    """
    last = len(segments) - 1
    return [segment for i, segment in enumerate(segments) if segment != "." or i == last]
