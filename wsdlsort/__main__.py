import sys

from wsdlsort.sort_wsdl import main

sys.exit(main())
