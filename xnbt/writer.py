"""
Binary NBT encoding.

NBTWriter writes a root TAG_Compound to a writable file-like object, mirroring NBTReader byte-for-byte.
Payloads are encoded by the write function registered for each tagType in a TypeRegistry;
the write*() functions at the bottom of this module implement the built-in tag types.
"""
from xnbt.shared import (
    WrongTagError, ConversionError, OutOfBoundsError, UnexpectedEndTagError, MalformedStringError,
    TAG_END, TAG_COMPOUND,
    DEFAULT_MAX_DEPTH, MAX_STRING_LENGTH, MAX_ARRAY_LENGTH,
    checkDepth, bigEndianBytes,
    _T, _B, _S, _US, _I, _L, _F, _D
)

#Returns the tagType of tag. Raises ConversionError if tag isn't a tag.
def _tagType( tag ):
    t = getattr( tag, "tagType", None )
    if t is None:
        raise ConversionError( tag )
    return t

class NBTWriter:
    """
    Encodes binary NBT data to output, a writable file-like object.

    registry is the TypeRegistry used to look up the payload writer of each tagType.
    maxDepth is the maximum nesting depth of TAG_Compounds and TAG_Lists; the root TAG_Compound is at depth 0.
    The reader enforces the same limit, so the writer refuses to produce data that couldn't be read back.

    The primitive write methods (byte(), int(), string(), etc.) are intended for use by custom tag writers.
    """
    def __init__( self, output, registry, maxDepth=DEFAULT_MAX_DEPTH ):
        self._o       = output
        self.registry = registry
        self.maxDepth = maxDepth

    def writeRoot( self, tag, name=None ):
        """
        Writes tag, which must be a TAG_Compound, as the named root tag of a document.
        If name is None, the tag's own name is used (see NBTDocument), or "" if it has none.
        """
        t = _tagType( tag )
        if t != TAG_COMPOUND:
            raise WrongTagError( TAG_COMPOUND, t )
        if name is None:
            name = getattr( tag, "name", "" )
        self.ubyte( TAG_COMPOUND )
        self.string( name )
        self.payload( tag, 0 )

    def payload( self, tag, depth ):
        """Writes the payload of tag at the given depth. Raises UnknownTagTypeError if its tagType isn't registered."""
        self.registry.resolve( _tagType( tag ) ).write( self, tag, depth )

    def write( self, b ):
        """Writes the bytes-like object b to the output as-is."""
        self._o.write( b )

    def byte( self, v ):
        """Writes a signed byte."""
        self._o.write( _B.pack( v ) )

    def ubyte( self, v ):
        """Writes an unsigned byte."""
        self._o.write( _T.pack( v ) )

    def short( self, v ):
        """Writes a signed big-endian short."""
        self._o.write( _S.pack( v ) )

    def ushort( self, v ):
        """Writes an unsigned big-endian short."""
        self._o.write( _US.pack( v ) )

    def int( self, v ):
        """Writes a signed big-endian int."""
        self._o.write( _I.pack( v ) )

    def long( self, v ):
        """Writes a signed big-endian long."""
        self._o.write( _L.pack( v ) )

    def float( self, v ):
        """Writes a big-endian binary32 float."""
        self._o.write( _F.pack( v ) )

    def double( self, v ):
        """Writes a big-endian binary64 float."""
        self._o.write( _D.pack( v ) )

    def string( self, v ):
        """
        Writes a string: an unsigned short length followed by the UTF-8 encoding of v.
        Raises OutOfBoundsError if the encoded string is longer than 65535 bytes.
        """
        try:
            b = v.encode( "utf-8" )
        except UnicodeEncodeError as e:
            raise MalformedStringError( str( e ) ) from e
        l = len( b )
        if l > MAX_STRING_LENGTH:
            raise OutOfBoundsError( l, 0, MAX_STRING_LENGTH )
        self._o.write( _US.pack( l ) )
        self._o.write( b )

    def length( self, l ):
        """Writes the signed int length of a TAG_List or array. Raises OutOfBoundsError if it can't be represented."""
        if l > MAX_ARRAY_LENGTH:
            raise OutOfBoundsError( l, 0, MAX_ARRAY_LENGTH )
        self._o.write( _I.pack( l ) )

def writeByte( w, tag, depth ):
    w.byte( tag )

def writeShort( w, tag, depth ):
    w.short( tag )

def writeInt( w, tag, depth ):
    w.int( tag )

def writeLong( w, tag, depth ):
    w.long( tag )

def writeFloat( w, tag, depth ):
    w.float( tag )

def writeDouble( w, tag, depth ):
    w.double( tag )

def writeByteArray( w, tag, depth ):
    w.length( len( tag ) )
    w.write( tag )

def writeString( w, tag, depth ):
    w.string( tag )

#Writes the payload of a TAG_Int_Array or TAG_Long_Array.
def _writeNumericArray( w, tag, depth ):
    w.length( len( tag ) )
    w.write( bigEndianBytes( tag ) )

writeIntArray  = _writeNumericArray
writeLongArray = _writeNumericArray

def writeList( w, tag, depth ):
    """
    Writes a TAG_List payload.
    The list's tagType must be registered (or TAG_End, if the list is empty) and every element must have that tagType.
    """
    checkDepth( depth, w.maxDepth )
    tagType = tag.listTagType
    l = len( tag )
    if tagType == TAG_END:
        if l > 0:
            raise UnexpectedEndTagError()
        write = None
    else:
        write = w.registry.resolve( tagType ).write

    w.ubyte( tagType )
    w.length( l )
    depth += 1
    for t in tag:
        tt = getattr( t, "tagType", -1 )
        if tt != tagType:
            raise WrongTagError( tagType, tt )
        write( w, t, depth )

def writeCompound( w, tag, depth ):
    """Writes a TAG_Compound payload: each entry as a named tag, in insertion order, followed by a TAG_End."""
    checkDepth( depth, w.maxDepth )
    resolve = w.registry.resolve
    depth += 1
    for name, t in tag.items():
        tt = _tagType( t )
        write = resolve( tt ).write
        w.ubyte( tt )
        w.string( name )
        write( w, t, depth )
    w.ubyte( TAG_END )
