"""
Conversion between tags and JSON values.

This conversion is lossy:
    * TAG_Byte, TAG_Short, TAG_Int and TAG_Long all become JSON integers, and TAG_Float and TAG_Double become JSON numbers.
    * TAG_Byte_Array, TAG_Int_Array and TAG_Long_Array all become lists of integers.
Going the other way, the original tag types can't be recovered. Instead:
    * true / false become TAG_Byte 1 / 0.
    * Integers become TAG_Int, or TAG_Long if they're too big for a TAG_Int.
    * Other numbers become TAG_Double.
    * Lists become TAG_Lists. A list of mixed integer tags is widened to TAG_Long, and a mix of integers and reals is widened to TAG_Double.
    * null has no NBT equivalent and raises a ConversionError.
"""
import math

from collections import OrderedDict

from xnbt.shared import (
    NBTFormatError, WrongTagError, ConversionError, OutOfBoundsError,
    TAG_BYTE, TAG_SHORT, TAG_INT, TAG_LONG, TAG_FLOAT, TAG_DOUBLE, TAG_BYTE_ARRAY, TAG_STRING, TAG_LIST, TAG_COMPOUND, TAG_INT_ARRAY, TAG_LONG_ARRAY,
    DEFAULT_MAX_DEPTH,
    checkDepth
)
from xnbt.tag import TAG_Byte, TAG_Int, TAG_Long, TAG_Double, TAG_String, TAG_List, TAG_Compound

_od_setitem  = OrderedDict.__setitem__

_INTEGRAL = frozenset( ( TAG_BYTE, TAG_SHORT, TAG_INT, TAG_LONG ) )
_REAL     = frozenset( ( TAG_FLOAT, TAG_DOUBLE ) )
_ARRAYS   = frozenset( ( TAG_INT_ARRAY, TAG_LONG_ARRAY ) )

def toJsonValue( tag, maxDepth=DEFAULT_MAX_DEPTH, depth=0 ):
    """
    Converts tag to a value that can be passed to json.dump() (int, float, str, list or dict).
    Raises ConversionError for tags that don't have a JSON equivalent.
    """
    t = getattr( tag, "tagType", None )
    if t in _INTEGRAL:
        return int( tag )
    if t in _REAL:
        v = float( tag )
        if not math.isfinite( v ):
            raise NBTFormatError( "{} can't be represented in JSON.".format( repr( tag ) ) )
        return v
    if t == TAG_STRING:
        return str( tag )
    if t == TAG_BYTE_ARRAY:
        #Shown signed, as in SNBT
        return [ b - 256 if b > 127 else b for b in tag ]
    if t in _ARRAYS:
        return tag.tolist()
    if t == TAG_LIST:
        checkDepth( depth, maxDepth )
        out = []
        for v in tag:
            out.append( toJsonValue( v, maxDepth, depth + 1 ) )
        return out
    if t == TAG_COMPOUND:
        checkDepth( depth, maxDepth )
        out = {}
        for k, v in tag.items():
            out[k] = toJsonValue( v, maxDepth, depth + 1 )
        return out
    raise ConversionError( tag )

def _integral( v ):
    if TAG_Int.min <= v <= TAG_Int.max:
        return TAG_Int( v )
    if TAG_Long.min <= v <= TAG_Long.max:
        return TAG_Long( v )
    raise OutOfBoundsError( v, TAG_Long.min, TAG_Long.max )

#Returns a TAG_List containing the given tags, widening mixed numeric types.
def _unify( items ):
    types = set( t.tagType for t in items )
    if len( types ) <= 1:
        return TAG_List( items )
    if types <= _INTEGRAL:
        return TAG_List( ( TAG_Long( v ) for v in items ), TAG_Long )
    if types <= _INTEGRAL | _REAL:
        return TAG_List( ( TAG_Double( v ) for v in items ), TAG_Double )

    first = items[0].tagType
    for v in items:
        if v.tagType != first:
            raise WrongTagError( first, v.tagType )

def fromJsonValue( value, maxDepth=DEFAULT_MAX_DEPTH, depth=0 ):
    """
    Converts value, as returned by json.load(), to a tag.
    A JSON object becomes a TAG_Compound; see the module documentation for the other conversions.
    """
    if isinstance( value, bool ):
        return TAG_Byte( 1 if value else 0 )
    if isinstance( value, int ):
        return _integral( value )
    if isinstance( value, float ):
        return TAG_Double( value )
    if isinstance( value, str ):
        return TAG_String( value )
    if isinstance( value, list ):
        checkDepth( depth, maxDepth )
        items = []
        for v in value:
            items.append( fromJsonValue( v, maxDepth, depth + 1 ) )
        return _unify( items )
    if isinstance( value, dict ):
        checkDepth( depth, maxDepth )
        tag = TAG_Compound()
        for k, v in value.items():
            _od_setitem( tag, k, fromJsonValue( v, maxDepth, depth + 1 ) )
        return tag
    raise ConversionError( value )
