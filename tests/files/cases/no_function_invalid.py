# @returns {string}
VALUE = "not a function"
