"""
Compression framing for binary NBT.

NBT files are usually gzip compressed (e.g. level.dat, player data), though zlib compressed and uncompressed data are also common (e.g. region file chunks, network packets).
When reading, the compression is detected from the first two bytes of the stream.
When writing, the caller chooses the compression; it is never guessed.
"""
import gzip
import zlib
import logging

from io import BytesIO

from xnbt.shared import UnsupportedCompressionError, StreamError

log = logging.getLogger( __name__ )

#Compression types
COMPRESSION_NONE = None
COMPRESSION_GZIP = "gzip"
COMPRESSION_ZLIB = "zlib"
COMPRESSIONS     = ( COMPRESSION_NONE, COMPRESSION_GZIP, COMPRESSION_ZLIB )

GZIP_MAGIC = b"\x1f\x8b"

def checkCompression( compression ):
    """Raises UnsupportedCompressionError if compression isn't None, "gzip" or "zlib"."""
    if compression not in COMPRESSIONS:
        raise UnsupportedCompressionError( compression )

def detect( head ):
    """
    Returns the compression type of a stream that starts with the given bytes: COMPRESSION_GZIP, COMPRESSION_ZLIB or COMPRESSION_NONE.
    head should contain (at least) the first two bytes of the stream.

    gzip streams start with the magic bytes 1F 8B.
    zlib streams start with a CMF byte (deflate, window size <= 32K) and an FLG byte such that CMF * 256 + FLG is a multiple of 31.
    Uncompressed NBT starts with 0A (TAG_Compound), which is neither.
    """
    if head[:2] == GZIP_MAGIC:
        return COMPRESSION_GZIP
    if len( head ) >= 2:
        cmf, flg = head[0], head[1]
        if cmf & 0x0F == 8 and cmf >> 4 <= 7 and ( cmf << 8 | flg ) % 31 == 0:
            return COMPRESSION_ZLIB
    return COMPRESSION_NONE

class _ReplayStream:
    """Read-only stream that returns head, then continues reading from stream. Used to "un-read" bytes from streams that can't peek or seek."""
    def __init__( self, head, stream ):
        self._head   = head
        self._stream = stream

    def read( self, n=-1 ):
        head = self._head
        if len( head ) == 0:
            return self._stream.read( n )
        if n is None or n < 0:
            self._head = b""
            return head + self._stream.read()
        if n <= len( head ):
            self._head = head[n:]
            return head[:n]
        self._head = b""
        return head + self._stream.read( n - len( head ) )

    def readable( self ):
        return True

class _TruncatedStream( BytesIO ):
    """The data decompressed from a zlib stream that ended before its end-of-stream marker. Reading past the end of it raises EOFError."""
    def read( self, n=-1 ):
        b = BytesIO.read( self, n )
        if n is None or n < 0 or len( b ) < n:
            raise EOFError( "Compressed data ended before the end-of-stream marker was reached" )
        return b

def peek( stream, n=2 ):
    """
    Returns ( head, stream ), where head is (up to) the first n bytes of stream, and stream is the stream to continue reading from.
    The returned stream still starts with head.

    If stream has a peek() method (e.g. a file opened in "rb" mode) it's used and stream itself is returned.
    Otherwise, if stream is seekable, the bytes are read and then stream is seeked back to where it was.
    Otherwise, the bytes are read and a wrapper that replays them before the rest of stream is returned.
    """
    try:
        p = getattr( stream, "peek", None )
        if p is not None:
            return p( n )[:n], stream

        seekable = getattr( stream, "seekable", None )
        if seekable is not None and seekable():
            pos = stream.tell()
            head = stream.read( n )
            stream.seek( pos )
            return head, stream

        head = stream.read( n )
        return head, _ReplayStream( head, stream )
    except OSError as e:
        raise StreamError( "Failed to read from input: {}".format( e ) ) from e

def openReader( stream ):
    """
    Detects the compression of stream, a readable binary file-like object.
    Returns ( compression, readable ), where readable is a file-like object that produces the decompressed data.
    If the compressed data is truncated, readable raises EOFError when a read runs past the data that could be recovered.
    """
    head, stream = peek( stream, 2 )
    compression = detect( head )
    log.debug( "Detected compression: %s", compression )

    if compression == COMPRESSION_GZIP:
        return compression, gzip.GzipFile( fileobj=stream, mode="rb" )
    if compression == COMPRESSION_ZLIB:
        d = zlib.decompressobj()
        try:
            data = d.decompress( stream.read() ) + d.flush()
        except ( OSError, zlib.error ) as e:
            raise StreamError( "Failed to decompress zlib data: {}".format( e ) ) from e
        if not d.eof:
            return compression, _TruncatedStream( data )
        return compression, BytesIO( data )
    return compression, stream

def compress( data, compression ):
    """
    Returns data (bytes-like) compressed with the given compression type.
    gzip output has its modification time set to 0 so the same data always compresses to the same bytes.
    """
    checkCompression( compression )
    if compression == COMPRESSION_GZIP:
        return gzip.compress( data, mtime=0 )
    if compression == COMPRESSION_ZLIB:
        return zlib.compress( data )
    return bytes( data )
