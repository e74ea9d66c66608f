"""Parse-tree nodes, scanner word handling, query echoing and conversion to attribute lists."""