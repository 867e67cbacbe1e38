"""
Binary NBT decoding.

NBTReader reads a root TAG_Compound from a readable file-like object containing uncompressed NBT data.
Payloads are decoded by the read function registered for each tagType in a TypeRegistry;
the read*() functions at the bottom of this module implement the built-in tag types.
"""
import zlib

from collections import OrderedDict

from xnbt.shared import (
    NBTFormatError, WrongTagError, UnexpectedEndTagError, UnexpectedEOFError, MalformedStringError, NegativeLengthError, StreamError,
    TAG_END, TAG_COMPOUND,
    DEFAULT_MAX_DEPTH,
    checkDepth, byteswapMaybe,
    _B, _S, _US, _I, _L, _F, _D
)
from xnbt.tag import (
    NBTDocument, TAG_Byte, TAG_Short, TAG_Int, TAG_Long, TAG_Float, TAG_Double, TAG_Byte_Array, TAG_String, TAG_List, TAG_Compound, TAG_Int_Array, TAG_Long_Array
)

_list_append = list.append
_od_setitem  = OrderedDict.__setitem__

class NBTReader:
    """
    Decodes binary NBT data from input, a readable file-like object.

    registry is the TypeRegistry used to look up the payload reader of each tagType.
    maxDepth is the maximum nesting depth of TAG_Compounds and TAG_Lists; the root TAG_Compound is at depth 0.

    The primitive read methods (byte(), int(), string(), etc.) are intended for use by custom tag readers.
    """
    def __init__( self, input, registry, maxDepth=DEFAULT_MAX_DEPTH ):
        self._i       = input
        self.registry = registry
        self.maxDepth = maxDepth
        #Number of bytes consumed so far.
        self.offset   = 0

    def readRoot( self ):
        """
        Reads a named TAG_Compound and returns it as an NBTDocument.

        Any NBTFormatError raised while reading has its offset attribute set, if it wasn't already,
        to the number of bytes that had been consumed when the error occurred.
        """
        try:
            tagType = self.ubyte()
            if tagType == TAG_END:
                raise UnexpectedEndTagError()
            if tagType != TAG_COMPOUND:
                raise WrongTagError( TAG_COMPOUND, tagType )
            name = self.string()
            tag = self.payload( TAG_COMPOUND, 0 )
        except NBTFormatError as e:
            if e.offset is None:
                e.offset = self.offset
            raise

        tag.__class__ = NBTDocument
        tag.name = name
        return tag

    def payload( self, tagType, depth ):
        """Reads the payload of a tag with the given tagType at the given depth. Raises UnknownTagTypeError if tagType isn't registered."""
        return self.registry.resolve( tagType ).read( self, depth )

    def read( self, n ):
        """
        Reads exactly n bytes from the input.
        Raises UnexpectedEOFError if the end of the input is reached before n bytes can be read.
        Compressed input that ends before its end-of-stream marker also raises UnexpectedEOFError.
        Other I/O and decompression errors are reraised as StreamError.
        """
        try:
            b = self._i.read( n )
        except UnexpectedEOFError:
            raise
        except EOFError as e:
            raise UnexpectedEOFError( n, 0 ) from e
        except ( OSError, zlib.error ) as e:
            raise StreamError( "Failed to read from input: {}".format( e ) ) from e
        l = len( b )
        self.offset += l
        if l != n:
            raise UnexpectedEOFError( n, l )
        return b

    def byte( self ):
        """Reads a signed byte."""
        return _B.unpack( self.read( 1 ) )[0]

    def ubyte( self ):
        """Reads an unsigned byte."""
        return self.read( 1 )[0] #note: no struct unpacking necessary; bytes() uses unsigned bytes

    def short( self ):
        """Reads a signed big-endian short."""
        return _S.unpack( self.read( 2 ) )[0]

    def ushort( self ):
        """Reads an unsigned big-endian short."""
        return _US.unpack( self.read( 2 ) )[0]

    def int( self ):
        """Reads a signed big-endian int."""
        return _I.unpack( self.read( 4 ) )[0]

    def long( self ):
        """Reads a signed big-endian long."""
        return _L.unpack( self.read( 8 ) )[0]

    def float( self ):
        """Reads a big-endian binary32 float."""
        return _F.unpack( self.read( 4 ) )[0]

    def double( self ):
        """Reads a big-endian binary64 float."""
        return _D.unpack( self.read( 8 ) )[0]

    def string( self ):
        """
        Reads a string: an unsigned short length followed by that many bytes of UTF-8.
        Raises MalformedStringError if the bytes aren't valid UTF-8 or the input ends before the string does.
        """
        l = self.ushort()
        try:
            b = self.read( l )
        except UnexpectedEOFError as e:
            raise MalformedStringError( "expected {:d} bytes but only {:d} remain".format( *e.args ) ) from e
        try:
            return b.decode( "utf-8" )
        except UnicodeDecodeError as e:
            raise MalformedStringError( str( e ) ) from e

    def length( self ):
        """Reads the signed int length of a TAG_List or array. Raises NegativeLengthError if it is negative."""
        l = self.int()
        if l < 0:
            raise NegativeLengthError( l )
        return l

def readByte( r, depth ):
    return TAG_Byte( r.byte() )

def readShort( r, depth ):
    return TAG_Short( r.short() )

def readInt( r, depth ):
    return TAG_Int( r.int() )

def readLong( r, depth ):
    return TAG_Long( r.long() )

def readFloat( r, depth ):
    return TAG_Float( r.float() )

def readDouble( r, depth ):
    return TAG_Double( r.double() )

def readByteArray( r, depth ):
    return TAG_Byte_Array( r.read( r.length() ) )

def readString( r, depth ):
    return TAG_String( r.string() )

#Reads the payload of a TAG_Int_Array or TAG_Long_Array.
#cls is the tag class, width is the size of each element in bytes.
def _readNumericArray( r, cls, width ):
    tag = cls()
    l = r.length()
    if l > 0:
        tag.frombytes( r.read( l * width ) )
        byteswapMaybe( tag )
    return tag

def readIntArray( r, depth ):
    return _readNumericArray( r, TAG_Int_Array, 4 )

def readLongArray( r, depth ):
    return _readNumericArray( r, TAG_Long_Array, 8 )

def readList( r, depth ):
    """
    Reads a TAG_List payload: the tagType of the list's elements, the number of elements, then that many unnamed payloads.
    A list of TAG_End is only permitted when it is empty.
    """
    checkDepth( depth, r.maxDepth )
    tagType = r.ubyte()
    l = r.length()

    tag = TAG_List()
    tag.listTagType = tagType
    if tagType == TAG_END:
        if l > 0:
            raise UnexpectedEndTagError()
        return tag

    read = r.registry.resolve( tagType ).read
    depth += 1
    for _ in range( l ):
        _list_append( tag, read( r, depth ) )
    return tag

def readCompound( r, depth ):
    """
    Reads a TAG_Compound payload: named tags (tagType, name, payload) until a TAG_End is encountered.
    If a name is repeated, the last tag with that name wins.
    """
    checkDepth( depth, r.maxDepth )
    tag = TAG_Compound()
    resolve = r.registry.resolve
    depth += 1

    tagType = r.ubyte()
    while tagType != TAG_END:
        #Resolve the tagType first so unknown tags are reported before their name is read.
        read = resolve( tagType ).read
        name = r.string()
        _od_setitem( tag, name, read( r, depth ) )
        tagType = r.ubyte()

    return tag
