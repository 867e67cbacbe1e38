import sys
import math
from struct import calcsize, Struct
from array import array

#Tag Types
#A TAG_End is a nameless tag that terminates TAG_Compound and is the default tagType for an empty TAG_List.
#It has no payload, and its named tag header is simply b"\0" because it is nameless (and therefore lacks any name-related entries).
TAG_END        = 0
TAG_BYTE       = 1  #A TAG_Byte payload stores a 1-byte signed integer.
TAG_SHORT      = 2  #A TAG_Short payload stores a 2-byte big-endian signed integer.
TAG_INT        = 3  #A TAG_Int payload stores a 4-byte big-endian signed integer.
TAG_LONG       = 4  #A TAG_Long payload stores an 8-byte big-endian signed integer.
TAG_FLOAT      = 5  #A TAG_Float payload stores a big-endian float (a 4-byte IEEE 754-2008, aka binary32).
TAG_DOUBLE     = 6  #A TAG_Double payload stores a big-endian double (an 8-byte IEEE 754-2008, aka binary64).
TAG_BYTE_ARRAY = 7  #A TAG_Byte_Array stores bytes of an unspecified format. The payload consists of the length of the array (a 4-byte big-endian signed integer), followed by exactly that many bytes.
TAG_STRING     = 8  #A TAG_String stores a UTF-8 encoded string. It starts with the length of the encoded string _in bytes_ (a 2-byte big-endian unsigned integer), followed by the encoded bytes.
TAG_LIST       = 9  #A TAG_List stores several tags of the same type. The payload consists of a single byte encoding the tagType, followed by the length of the list (a 4-byte big-endian signed integer), followed by that many payloads of the specified tag.
TAG_COMPOUND   = 10 #A TAG_Compound stored several uniquely-named tags of any type. The payload consists of several pairs of named tag headers + tag payloads and is terminated by a TAG_End (null byte).
TAG_INT_ARRAY  = 11 #A TAG_Int_Array's payload consists of the length of the array (a 4-byte big-endian signed integer) followed by that many 4-byte big-endian signed integers.
TAG_LONG_ARRAY = 12 #A TAG_Long_Array's payload consists of the length of the array (a 4-byte big-endian signed integer) followed by that many 8-byte big-endian signed integers.

#Internal names of tags (indexed by tag type) as defined by the NBT specification
TAG_NAMES = (
    "TAG_End",
    "TAG_Byte",
    "TAG_Short",
    "TAG_Int",
    "TAG_Long",
    "TAG_Float",
    "TAG_Double",
    "TAG_Byte_Array",
    "TAG_String",
    "TAG_List",
    "TAG_Compound",
    "TAG_Int_Array",
    "TAG_Long_Array"
)

#Number of tag types reserved by the format. Custom tag types registered with a TypeRegistry must use ids in [TAG_COUNT, MAX_TAG_TYPE].
TAG_COUNT    = len( TAG_NAMES )
MAX_TAG_TYPE = 255

#Default ceiling for nested TAG_Compound / TAG_List containers.
#The root container is at depth 0; a container nested directly inside it is at depth 1, and so on.
DEFAULT_MAX_DEPTH = 512

#Largest values that fit in a length prefix.
MAX_STRING_LENGTH = 65535
MAX_ARRAY_LENGTH  = 2147483647

INF = math.inf

#Datatypes for signed 4-byte and 8-byte integers.
#Unfortunately, we have to select these at runtime because these datatypes are free to vary in size from system to system.
#We /need/ a 4-byte integer type: select one here, or fail if one is not available.
if calcsize( "i" ) == 4:
    SIGNED_INT_TYPE = "i"
elif calcsize( "l" ) == 4:
    SIGNED_INT_TYPE = "l"
else:
    raise OSError( "No 4-byte datatype available." )
SIGNED_LONG_TYPE = "q"

#array stores native-endian values, so big-endian data has to be byteswapped on little-endian systems.
_LITTLE_ENDIAN = sys.byteorder == "little"

#Structs
_T  = Struct( ">B"  )     #Tag type id (unsigned byte)
_TL = Struct( ">Bi" )     #Tag list info
_B  = Struct( ">b"  )     #Signed byte (1 byte)
_S  = Struct( ">h"  )     #Signed big-endian short (2 bytes)
_US = Struct( ">H"  )     #Unsigned big-endian short (2 bytes), used for string lengths
_I  = Struct( ">i"  )     #Signed big-endian int (4 bytes)
_L  = Struct( ">q"  )     #Signed big-endian long (8 bytes)
_F  = Struct( ">f"  )     #Big-endian float (4 bytes)
_D  = Struct( ">d"  )     #Big-endian double (8 bytes)

class NBTFormatError( Exception ):
    """
    This exception is raised when parsing, writing, or modifying data that violates the NBT specification.

    Errors raised while decoding binary data have their offset attribute set to the number of (decompressed) bytes
    that had been consumed when the error was detected.
    """
    offset = None

    def describe( self ):
        """Returns the description of the error, without location information."""
        return Exception.__str__( self )

    def __str__( self ):
        s = self.describe()
        if self.offset is not None:
            s = "{} (at byte {:d})".format( s, self.offset )
        return s

class WrongTagError( NBTFormatError ):
    """
    WrongTagError( expected, given )

    This exception is raised when the root tag of an NBT document is not a TAG_Compound, or when the wrong type of tag is written to a TAG_List.
    According to the NBT specification, TAG_Lists are only permitted to contain tags of a single type.
    """
    def describe( self ):
        return "Expected {}, but received {} instead.".format( describeTag( self.args[0] ), describeTag( self.args[1] ) )

class ConversionError( NBTFormatError ):
    """
    ConversionError( value, tagType=None )

    This exception is raised when failing to find a tag class to convert a non-tag value to.
    This indicates the tag class to convert to couldn't be determined from the context, and there isn't a mapping from value's Python type to a tag class.
    This often happens when value is an int or float; these types don't have tag mappings because there are multiple possible conversions.
    In other words, the type to convert to would be ambiguous:
        * int could be converted TAG_Byte, TAG_Short, TAG_Int, or TAG_Long.
        * float could be converted TAG_Float or TAG_Double.
    If you run into this problem, you can fix it by manually specifying the tag type you want to convert to.
    e.g.
        doc["myNumber"] = 5             #Raises an exception if myNumber doesn't exist. Instead of this...
        doc["myNumber"] = TAG_Int( 5 )  #...try this
        doc.int( "myNumber", 5 )        #...or better yet, this

        ls = doc.list( "myList", [ 10, 11, 12 ] )            #Instead of this...
        ls = doc.list( "myList", [ TAG_Int( 10 ), 11, 12 ] ) #...try this
        ls = doc.list( "myList", [ 10, 11, 12 ], TAG_Int )   #...or better yet, this
    """
    def describe( self ):
        if len( self.args ) > 1:
            return "Unable to convert value of type \"{}\" to {}.".format( self.args[0].__class__.__name__, describeTag( self.args[1] ) )
        return "Unable to convert value of type \"{}\" to a tag.".format( self.args[0].__class__.__name__ )

class OutOfBoundsError( NBTFormatError ):
    """
    OutOfBoundsError( value, min, max )

    This exception is raised when parsing or writing a value that is outside of the valid range for that type.
    This error can be raised for integral types (byte, short, int, long) if the type cannot represent the value,
    or for tag names and sequence types (string, list, bytearray, intarray, longarray) if the length is too long to be represented.
    """
    def describe( self ):
        return "Value {} is outside of expected range [{:d},{:d}].".format( *self.args )

class UnknownTagTypeError( NBTFormatError ):
    """
    UnknownTagTypeError( tagType )

    This exception is raised when a tag with an id that isn't registered with the active TypeRegistry is parsed or written.
    See "Tag Types" above for the built-in tag types.
    """
    def describe( self ):
        return "Unknown or unsupported tag type: {:d}".format( self.args[0] )

class DuplicateTypeIdError( NBTFormatError ):
    """
    DuplicateTypeIdError( tagType )

    This exception is raised when registering a tag type whose id (or SNBT array prefix) is already taken in a TypeRegistry.
    Built-in tag types cannot be replaced.
    """
    def describe( self ):
        return "Tag type {} is already registered.".format( self.args[0] )

class UnexpectedEndTagError( NBTFormatError ):
    """
    UnexpectedEndTagError()

    This exception is raised when a TAG_End appears where a payload-carrying tag is required,
    e.g. as the root of a document or as the element type of a non-empty TAG_List.
    """
    def describe( self ):
        return "Unexpected TAG_End."

class MalformedStringError( NBTFormatError ):
    """
    MalformedStringError( reason )

    This exception is raised when a tag name or TAG_String payload isn't valid UTF-8, or is shorter than its length prefix claims.
    """
    def describe( self ):
        return "Malformed string: {}".format( self.args[0] )

class NegativeLengthError( NBTFormatError ):
    """
    NegativeLengthError( length )

    This exception is raised when the length prefix of a TAG_List, TAG_Byte_Array, TAG_Int_Array or TAG_Long_Array is negative.
    """
    def describe( self ):
        return "Negative length: {:d}".format( self.args[0] )

class UnexpectedEOFError( NBTFormatError, EOFError ):
    """
    UnexpectedEOFError( expected, received )

    This exception is raised when the end of the input is reached before a complete value could be read.
    """
    def describe( self ):
        return "End of file reached prematurely! Expected {:d} bytes, got {:d}.".format( *self.args )

class NestingTooDeepError( NBTFormatError ):
    """
    NestingTooDeepError( depth, maxDepth )

    This exception is raised when TAG_Compounds / TAG_Lists are nested deeper than the configured maximum depth.
    It is never silently truncated; deeply nested input is treated as malicious or corrupt.
    """
    def describe( self ):
        return "Tags nested too deeply: depth {:d} exceeds the maximum of {:d}.".format( *self.args )

class UnsupportedCompressionError( NBTFormatError, ValueError ):
    """
    UnsupportedCompressionError( compression )

    This exception is raised when an unknown compression type is requested.
    Valid compression types are None, "gzip", and "zlib".
    """
    def describe( self ):
        return "Unknown compression type \"{}\".".format( self.args[0] )

class StreamError( NBTFormatError ):
    """
    StreamError( message )

    Wraps an I/O or decompression failure that occurred while reading NBT data.
    The original exception is available as __cause__.
    """
    pass

class SNBTSyntaxError( NBTFormatError ):
    """
    SNBTSyntaxError( message, text, position )

    Base class for errors raised while parsing SNBT.
    position is the index of the offending character in text; line and column are 1-based.
    """
    def __init__( self, message, text, position ):
        super().__init__( message, text, position )
        self.message  = message
        self.position = position
        self.line     = text.count( "\n", 0, position ) + 1
        self.column   = position - ( text.rfind( "\n", 0, position ) + 1 ) + 1

    def describe( self ):
        return "{} at line {:d}, column {:d}".format( self.message, self.line, self.column )

class UnexpectedTokenError( SNBTSyntaxError ):
    """Raised when the SNBT parser encounters a character or token it did not expect."""
    pass

class UnterminatedStringError( SNBTSyntaxError ):
    """Raised when a quoted SNBT string is missing its closing quote. position points at the opening quote."""
    pass

class InvalidNumberError( SNBTSyntaxError ):
    """Raised when an SNBT numeric literal is malformed for its suffix or outside the range of its tag type."""
    pass

def describeTag( tagType ):
    """
    Returns a short description of a tag with the given tagType, including the internal name and numeric type (e.g. TAG_Compound (10) ).
    tagType is expected to be a number.
    If tagType is not a built-in tag type, returns "Unknown (<tagType>)".
    """
    if tagType < 0 or tagType >= TAG_COUNT:
        return "Unknown ({:d})".format( tagType )
    return "{} ({:d})".format( TAG_NAMES[tagType], tagType )

def checkDepth( depth, maxDepth ):
    """Raises NestingTooDeepError if a container at the given depth would exceed maxDepth."""
    if depth > maxDepth:
        raise NestingTooDeepError( depth, maxDepth )

def byteswapMaybe( a ):
    """
    Byteswap the given array if on a little-endian system. Otherwise, do nothing.
    This should be done after reading big-endian data to convert it to native-endian,
    or before writing native-endian data to convert it to big-endian.
    """
    if _LITTLE_ENDIAN:
        a.byteswap()

def bigEndianBytes( a ):
    """Returns the contents of a (an array of integers) as big-endian bytes without modifying a."""
    if _LITTLE_ENDIAN:
        a = array( a.typecode, a )
        a.byteswap()
    return a.tobytes()
