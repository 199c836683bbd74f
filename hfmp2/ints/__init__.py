from hfmp2.ints.ints import Integrals, load
from hfmp2.ints.readers import read_trexio, read_fcidump, detect_format
